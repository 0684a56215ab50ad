"""Jinja rendering of the generated Go source."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

_TEMPLATE_NAME = "yamlenums.go.j2"


@dataclass
class RenderContext:
    """Data handed to the template for one output file."""

    command: str
    package_name: str
    types_and_values: Dict[str, List[Tuple[str, int]]] = field(default_factory=dict)


class TemplateRenderer:
    """Turns resolved name/value tables into Go source text."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, context: RenderContext) -> str:
        template = self._env.get_template(_TEMPLATE_NAME)
        types = [
            {
                "name": type_name,
                "name_to_value": _aligned_rows(
                    [(f'"{name}":', f"{name},") for name, _ in values]
                ),
                "value_to_name": _aligned_rows(
                    [(f"{name}:", f'"{name}",') for name, _ in values]
                ),
            }
            for type_name, values in context.types_and_values.items()
        ]
        return template.render(
            command=context.command,
            package_name=context.package_name,
            types=types,
        )


def _aligned_rows(rows: Sequence[Tuple[str, str]]) -> List[str]:
    """Pad keys so values line up the way gofmt aligns composite literals."""
    if not rows:
        return []
    width = max(len(key) for key, _ in rows) + 1
    return [f"{key.ljust(width)}{value}" for key, value in rows]


def build_context(
    command: str, package_name: str, types_and_values: Mapping[str, Sequence[Tuple[str, int]]]
) -> RenderContext:
    return RenderContext(
        command=command,
        package_name=package_name,
        types_and_values={name: list(values) for name, values in types_and_values.items()},
    )


__all__ = ["RenderContext", "TemplateRenderer", "build_context"]
