"""gofmt integration for generated Go source."""

from __future__ import annotations

import subprocess
from typing import Callable, Sequence

from ..errors import FormatError

Runner = Callable[[Sequence[str], str], str]


class GoFormatter:
    """Pipes generated source through ``gofmt`` and returns the formatted text."""

    def __init__(self, command: str = "gofmt", runner: Runner | None = None) -> None:
        self.command = command
        self._runner = runner or self._default_runner

    def format(self, source: str) -> str:
        try:
            return self._runner([self.command], source)
        except FileNotFoundError as exc:
            raise FormatError(f"{self.command} not found: {exc}") from exc
        except OSError as exc:
            raise FormatError(f"cannot run {self.command}: {exc}") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise FormatError(f"{self.command} rejected generated source: {detail}") from exc

    @staticmethod
    def _default_runner(args: Sequence[str], source: str) -> str:
        completed = subprocess.run(
            list(args),
            input=source,
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["GoFormatter"]
