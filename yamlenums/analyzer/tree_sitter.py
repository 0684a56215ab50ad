"""Tree-sitter powered reader for Go source files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import ParseError
from ..logging import get_logger
from ..models import ConstantGroup, ConstantSpec, TypeDecl

GO_LANGUAGE = Language(tree_sitter_go.language())


@dataclass
class GoSourceFile:
    """Top-level declarations of one parsed Go file."""

    path: Path
    package_name: str
    groups: List[ConstantGroup] = field(default_factory=list)
    types: List[TypeDecl] = field(default_factory=list)


class GoSourceParser:
    """Extracts the package clause, const groups and type declarations of Go files."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)
        self.logger = get_logger("analyzer.tree_sitter")

    def read(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ParseError(f"reading {path.name}: {exc}") from exc

    def parse(self, path: Path, source_bytes: Optional[bytes] = None) -> GoSourceFile:
        """Parse ``path``, reusing ``source_bytes`` when the caller already read them."""
        if source_bytes is None:
            source_bytes = self.read(path)
        try:
            source_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"{path.name}: invalid UTF-8 encoding: {exc}") from exc

        tree = self._parser.parse(source_bytes)
        root = tree.root_node
        if root.has_error:
            raise ParseError(self._diagnostic(path, root))

        package_name: Optional[str] = None
        parsed = GoSourceFile(path=path, package_name="")
        for child in root.children:
            if child.type == "package_clause":
                package_name = self._package_name(child)
            elif child.type == "const_declaration":
                parsed.groups.append(self._const_group(path, child))
            elif child.type == "type_declaration":
                parsed.types.extend(self._type_decls(path, child))

        if not package_name:
            raise ParseError(f"{path.name}: expected package clause")
        parsed.package_name = package_name
        self.logger.debug(
            "Parsed %s: package %s, %d const groups, %d types",
            path.name,
            package_name,
            len(parsed.groups),
            len(parsed.types),
        )
        return parsed

    @staticmethod
    def _node_text(node: Node) -> str:
        return node.text.decode("utf-8") if node.text is not None else ""

    def _package_name(self, node: Node) -> str:
        for child in node.named_children:
            if child.type == "package_identifier":
                return self._node_text(child)
        return ""

    def _const_group(self, path: Path, node: Node) -> ConstantGroup:
        group = ConstantGroup()
        specs = [child for child in node.named_children if child.type == "const_spec"]
        for iota, spec in enumerate(specs):
            type_node = spec.child_by_field_name("type")
            value_node = spec.child_by_field_name("value")
            values = _expressions(value_node.named_children) if value_node is not None else []
            group.specs.append(
                ConstantSpec(
                    names=[
                        self._node_text(name)
                        for name in spec.children_by_field_name("name")
                        if name.type == "identifier"
                    ],
                    type_name=self._node_text(type_node) if type_node is not None else None,
                    values=values,
                    path=path.name,
                    line=spec.start_point[0] + 1,
                    iota=iota,
                )
            )
        return group

    def _type_decls(self, path: Path, node: Node) -> Iterable[TypeDecl]:
        for spec in node.named_children:
            if spec.type not in {"type_spec", "type_alias"}:
                continue
            name_node = spec.child_by_field_name("name")
            type_node = spec.child_by_field_name("type")
            if name_node is None or type_node is None:
                continue
            underlying = self._node_text(type_node) if type_node.type == "type_identifier" else None
            yield TypeDecl(
                name=self._node_text(name_node),
                underlying=underlying,
                underlying_text=self._node_text(type_node),
                path=path.name,
                line=spec.start_point[0] + 1,
            )

    def _diagnostic(self, path: Path, root: Node) -> str:
        node = _first_error(root)
        if node is None:
            return f"{path.name}: syntax error"
        row, column = node.start_point
        location = f"{path.name}:{row + 1}:{column + 1}"
        if node.is_missing:
            return f"{location}: syntax error: missing {node.type}"
        snippet = self._node_text(node).splitlines()[0] if node.text else ""
        return f"{location}: syntax error near {snippet!r}"


def _expressions(nodes: Iterable[Node]) -> List[Node]:
    return [node for node in nodes if node.type != "comment"]


def _first_error(node: Node) -> Optional[Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


__all__ = ["GO_LANGUAGE", "GoSourceFile", "GoSourceParser"]
