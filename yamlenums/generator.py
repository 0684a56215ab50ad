"""Generation driver: one package parse, then one output file per requested type."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .analyzer import Package, parse_package
from .config import DEFAULT_PREFIX, DEFAULT_SUFFIX
from .errors import FormatError, UsageError
from .logging import get_logger
from .models import GenerationRequest, GenerationResult
from .postproc import GoFormatter
from .render import TemplateRenderer, build_context
from .writer import FileWriter

PackageLoader = Callable[[Path], Package]


def output_filename(type_name: str, *, prefix: str = DEFAULT_PREFIX, suffix: str = DEFAULT_SUFFIX) -> str:
    """Return the lower-cased file name generated for ``type_name``."""
    return f"{prefix}{type_name}{suffix}.go".lower()


class Generator:
    """Coordinates analysis, rendering, formatting and writing for a run."""

    def __init__(
        self,
        loader: PackageLoader | None = None,
        renderer: TemplateRenderer | None = None,
        formatter: Optional[GoFormatter] = None,
        writer: FileWriter | None = None,
    ) -> None:
        self._loader = loader or parse_package
        self.renderer = renderer or TemplateRenderer()
        self.formatter = formatter
        self.writer = writer or FileWriter()
        self.logger = get_logger("generator")

    def run(
        self,
        directory: Path | str,
        type_names: Sequence[str],
        *,
        prefix: str = DEFAULT_PREFIX,
        suffix: str = DEFAULT_SUFFIX,
        command: str = "",
    ) -> List[GenerationResult]:
        """Generate one file per type; the first failure aborts the remaining types.

        Files written for earlier types are left in place.
        """
        root = Path(directory).expanduser().resolve()
        requests = [GenerationRequest(type_name=name, directory=root) for name in type_names]
        if not requests:
            raise UsageError("at least one type name is required")

        self.logger.debug("Parsing package in %s", root)
        package = self._loader(root)

        results: List[GenerationResult] = []
        for request in requests:
            results.append(
                self._generate(package, request, prefix=prefix, suffix=suffix, command=command)
            )
        return results

    def _generate(
        self,
        package: Package,
        request: GenerationRequest,
        *,
        prefix: str,
        suffix: str,
        command: str,
    ) -> GenerationResult:
        values = package.values_of_type(request.type_name)
        self.logger.debug("Values for %s: %s", request.type_name, values)

        context = build_context(command, package.name, {request.type_name: values})
        source = self.renderer.render(context)
        formatted = False
        if self.formatter is not None:
            try:
                source = self.formatter.format(source)
                formatted = True
            except FormatError as exc:
                self.logger.warning("writing %s unformatted: %s", request.type_name, exc)

        path = request.directory / output_filename(request.type_name, prefix=prefix, suffix=suffix)
        self.writer.write(path, source)
        self.logger.info("Generated %s for type %s", path.name, request.type_name)
        return GenerationResult(request=request, path=path, formatted=formatted)


__all__ = ["Generator", "output_filename"]
