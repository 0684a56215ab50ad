"""Exception taxonomy shared across yamlenums components."""

from __future__ import annotations


class GeneratorError(RuntimeError):
    """Base class for failures that abort a generation run."""


class UsageError(GeneratorError):
    """Raised when the command line is missing or misusing flags."""


class ParseError(GeneratorError):
    """Raised when a directory does not hold exactly one valid Go package."""


class TypeNotFoundError(GeneratorError):
    """Raised when no constants (or no declaration) exist for a requested type."""


class UnsupportedExpressionError(GeneratorError):
    """Raised when a constant's value cannot be evaluated."""


class UnsupportedTypeError(GeneratorError):
    """Raised when a requested type is not backed by an integer type."""


class WriteError(GeneratorError):
    """Raised when generated output cannot be persisted."""


class FormatError(GeneratorError):
    """Raised when gofmt is unavailable or rejects the generated source.

    Never terminal: the driver logs it and writes the unformatted text.
    """


__all__ = [
    "FormatError",
    "GeneratorError",
    "ParseError",
    "TypeNotFoundError",
    "UnsupportedExpressionError",
    "UnsupportedTypeError",
    "UsageError",
    "WriteError",
]
