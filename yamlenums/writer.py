"""Persistence of generated files."""

from __future__ import annotations

from pathlib import Path

from .errors import WriteError
from .logging import get_logger


class FileWriter:
    """Writes generated text to disk, overwriting existing files."""

    def __init__(self) -> None:
        self.logger = get_logger("writer")

    def write(self, path: Path, text: str) -> Path:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"writing output {path}: {exc}") from exc
        self.logger.debug("Wrote %d bytes to %s", len(text.encode("utf-8")), path)
        return path


__all__ = ["FileWriter"]
