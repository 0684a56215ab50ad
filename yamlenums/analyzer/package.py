"""Declaration-level model of one Go package and enum value resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import ParseError, TypeNotFoundError, UnsupportedTypeError
from ..logging import get_logger
from ..models import ConstantEntry, ConstantGroup, ResolvedConstant, TypeDecl, ValueTable
from .constraints import BuildContext
from .evaluator import ConstantEvaluator
from .integers import IntegerKind, builtin_kind
from .tree_sitter import GoSourceFile, GoSourceParser

logger = get_logger("analyzer.package")


class Package:
    """Top-level declarations of all Go files that make up one package."""

    def __init__(
        self,
        name: str,
        directory: Path,
        files: Sequence[GoSourceFile],
    ) -> None:
        self.name = name
        self.directory = directory
        self.files = [source.path for source in files]
        self.groups: List[ConstantGroup] = [group for source in files for group in source.groups]
        self.types: Dict[str, TypeDecl] = {}
        for source in files:
            for decl in source.types:
                existing = self.types.get(decl.name)
                if existing is not None:
                    raise ParseError(
                        f"{decl.path}:{decl.line}: type {decl.name} redeclared "
                        f"(previous declaration at {existing.path}:{existing.line})"
                    )
                self.types[decl.name] = decl

        self.entries = _expand_groups(self.groups)
        self._constants: Dict[str, ConstantEntry] = {}
        for entry in self.entries:
            if entry.name == "_":
                continue
            existing_entry = self._constants.get(entry.name)
            if existing_entry is not None:
                raise ParseError(
                    f"{entry.position}: constant {entry.name} redeclared "
                    f"(previous declaration at {existing_entry.position})"
                )
            self._constants[entry.name] = entry
        self._evaluator = ConstantEvaluator(self)

    def constant(self, name: str) -> Optional[ConstantEntry]:
        return self._constants.get(name)

    def kind_for(self, type_name: str) -> IntegerKind:
        """Return the integer kind underlying ``type_name``, chasing named types."""
        name = type_name
        seen: set[str] = set()
        while True:
            decl = self.types.get(name)
            if decl is None:
                builtin = builtin_kind(name)
                if builtin is not None:
                    return builtin
                if name == type_name:
                    raise TypeNotFoundError(
                        f"type {type_name} is not declared in package {self.name}"
                    )
                raise UnsupportedTypeError(
                    f"type {type_name} has underlying type {name}, which is not an integer type"
                )
            if name in seen:
                raise UnsupportedTypeError(f"type {type_name} has a cyclic definition")
            seen.add(name)
            if decl.underlying is None:
                raise UnsupportedTypeError(
                    f"type {type_name} has underlying type {decl.underlying_text}, "
                    "which is not an integer type"
                )
            name = decl.underlying

    def lookup_kind(self, type_name: str) -> Optional[IntegerKind]:
        try:
            return self.kind_for(type_name)
        except (TypeNotFoundError, UnsupportedTypeError):
            return None

    def value_table(self, type_name: str) -> ValueTable:
        entries = [
            entry for entry in self.entries if entry.type_name == type_name and entry.name != "_"
        ]
        if not entries:
            raise TypeNotFoundError(f"no values defined for type {type_name}")

        kind = self.kind_for(type_name)
        resolved = [
            ResolvedConstant(
                name=entry.name,
                value=self._evaluator.value_of(entry),
                index=entry.index,
                synonym=self._is_synonym(entry),
            )
            for entry in entries
        ]
        table = ValueTable(type_name=type_name, kind=kind, constants=resolved)
        logger.debug(
            "Resolved %d constants of type %s (%s)", len(resolved), type_name, kind.name
        )
        return table

    def _is_synonym(self, entry: ConstantEntry) -> bool:
        """A bare reference to another constant of the same type defers to that name."""
        target_name = entry.reference
        if target_name is None:
            return False
        target = self.constant(target_name)
        return target is not None and target.type_name == entry.type_name

    def values_of_type(self, type_name: str) -> List[Tuple[str, int]]:
        """Return (canonical name, value) pairs in first-declaration order."""
        return self.value_table(type_name).pairs()


def parse_package(
    directory: Path | str,
    *,
    parser: GoSourceParser | None = None,
    context: BuildContext | None = None,
) -> Package:
    """Load the Go package in ``directory`` as the target platform would build it."""
    root = Path(directory)
    if not root.is_dir():
        raise ParseError(f"{root} is not a directory")

    source_parser = parser or GoSourceParser()
    build = context or BuildContext.from_environment()
    files: List[GoSourceFile] = []
    for path in sorted(root.glob("*.go")):
        if not _is_candidate(path) or not build.matches_file_name(path.name):
            continue
        source_bytes = source_parser.read(path)
        if not build.should_build(source_bytes, path.name):
            logger.debug(
                "Skipping %s: build constraints exclude %s/%s", path.name, build.goos, build.goarch
            )
            continue
        files.append(source_parser.parse(path, source_bytes))
    if not files:
        raise ParseError(f"no buildable Go source files in {root}")

    first = files[0]
    for source in files[1:]:
        if source.package_name != first.package_name:
            raise ParseError(
                f"found packages {first.package_name} ({first.path.name}) and "
                f"{source.package_name} ({source.path.name}) in {root}"
            )

    logger.debug("Loaded package %s from %d files in %s", first.package_name, len(files), root)
    return Package(first.package_name, root, files)


def _is_candidate(path: Path) -> bool:
    name = path.name
    return not name.startswith(("_", ".")) and not name.endswith("_test.go") and path.is_file()


def _expand_groups(groups: Sequence[ConstantGroup]) -> List[ConstantEntry]:
    entries: List[ConstantEntry] = []
    for group in groups:
        inherited_type: Optional[str] = None
        inherited_values: List[object] = []
        for spec in group.specs:
            if spec.type_name:
                inherited_type = spec.type_name
            if spec.values:
                inherited_values = list(spec.values)
            values = inherited_values
            problem = None
            if values and len(values) != len(spec.names):
                problem = f"{len(spec.names)} names but {len(values)} values"
            for position, name in enumerate(spec.names):
                entries.append(
                    ConstantEntry(
                        name=name,
                        type_name=inherited_type,
                        expression=values[position] if position < len(values) else None,
                        iota=spec.iota,
                        index=len(entries),
                        path=spec.path,
                        line=spec.line,
                        problem=problem,
                    )
                )
    return entries


__all__ = ["Package", "parse_package"]
