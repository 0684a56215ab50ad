"""Post-processing applied to generated source before it is written."""

from .gofmt import GoFormatter

__all__ = ["GoFormatter"]
