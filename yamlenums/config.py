"""Configuration loading for yamlenums (.yamlenums.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import GeneratorError

CONFIG_FILENAME = ".yamlenums.yml"
DEFAULT_PREFIX = ""
DEFAULT_SUFFIX = "_yamlenums"
DEFAULT_GOFMT = "gofmt"


class ConfigError(GeneratorError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class YamlEnumsConfig:
    """Settings defined in .yamlenums.yml, with built-in defaults."""

    root: Path
    prefix: str = DEFAULT_PREFIX
    suffix: str = DEFAULT_SUFFIX
    format: bool = True
    gofmt: str = DEFAULT_GOFMT

    def merged(
        self,
        *,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        format: Optional[bool] = None,
    ) -> "YamlEnumsConfig":
        """Return a copy where explicitly provided command-line values win."""
        return YamlEnumsConfig(
            root=self.root,
            prefix=self.prefix if prefix is None else prefix,
            suffix=self.suffix if suffix is None else suffix,
            format=self.format if format is None else format,
            gofmt=self.gofmt,
        )


def load_config(directory: Path) -> YamlEnumsConfig:
    """Load configuration from the package directory, falling back to defaults."""
    root = directory.expanduser().resolve()
    config_file = root / CONFIG_FILENAME
    if not config_file.exists():
        return YamlEnumsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    prefix = _as_str(data.get("prefix"))
    suffix = _as_str(data.get("suffix"))
    format_enabled = _as_bool(data.get("format"))
    gofmt = _as_str(data.get("gofmt"))

    return YamlEnumsConfig(
        root=root,
        prefix=DEFAULT_PREFIX if prefix is None else prefix,
        suffix=DEFAULT_SUFFIX if suffix is None else suffix,
        format=True if format_enabled is None else format_enabled,
        gofmt=gofmt or DEFAULT_GOFMT,
    )


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "YamlEnumsConfig", "load_config"]
