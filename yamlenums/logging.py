"""Diagnostics for the generator, written to stderr so Go tooling can relay them."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOGGER_NAME = "yamlenums"

# Verbose runs name the emitting component, e.g. yamlenums.analyzer.package.
_BRIEF_FORMAT = "yamlenums: %(levelname)s %(message)s"
_VERBOSE_FORMAT = "yamlenums: %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for one generator component, e.g. ``analyzer.package``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Route generator diagnostics to ``stream`` (stderr by default).

    ``go generate`` shows a directive's stderr next to the failing file, so
    errors and the unformatted-output warning land there. ``verbose`` adds
    the per-file parse and resolution traces.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # One handler per process, even when main() is called repeatedly.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _BRIEF_FORMAT))
    logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
