"""Go package analysis: loading declarations and resolving enum values."""

from __future__ import annotations

from .constraints import BuildContext
from .integers import IntegerKind
from .package import Package, parse_package
from .tree_sitter import GoSourceFile, GoSourceParser

__all__ = [
    "BuildContext",
    "GoSourceFile",
    "GoSourceParser",
    "IntegerKind",
    "Package",
    "parse_package",
]
