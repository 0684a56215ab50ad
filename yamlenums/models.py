"""Core data models shared across yamlenums components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .analyzer.integers import IntegerKind


@dataclass
class ConstantSpec:
    """One line of a const group as written in the source."""

    names: List[str]
    type_name: Optional[str]
    values: List[Any]
    path: str
    line: int
    iota: int


@dataclass
class ConstantGroup:
    """A ``const`` declaration: a single spec or a parenthesized block."""

    specs: List[ConstantSpec] = field(default_factory=list)


@dataclass
class TypeDecl:
    """Top-level type declaration with its underlying type when it is a plain identifier."""

    name: str
    underlying: Optional[str]
    underlying_text: str
    path: str
    line: int


@dataclass
class ConstantEntry:
    """A single named constant after type and expression elision are applied."""

    name: str
    type_name: Optional[str]
    expression: Any
    iota: int
    index: int
    path: str
    line: int
    problem: Optional[str] = None

    @property
    def position(self) -> str:
        return f"{self.path}:{self.line}"

    @property
    def reference(self) -> Optional[str]:
        """Name of the constant this entry's value is a bare reference to, if any."""
        if self.expression is None or self.expression.type != "identifier":
            return None
        return self.expression.text.decode("utf-8")


@dataclass(frozen=True)
class ResolvedConstant:
    name: str
    value: int
    index: int
    synonym: bool = False


@dataclass
class ValueTable:
    """Resolved constants of one type and the canonical name for each value."""

    type_name: str
    kind: IntegerKind
    constants: List[ResolvedConstant]

    def pairs(self) -> List[Tuple[str, int]]:
        """Return (canonical name, value) ordered by each value's first declaration."""
        groups: Dict[int, List[ResolvedConstant]] = {}
        for constant in sorted(self.constants, key=lambda item: item.index):
            groups.setdefault(constant.value, []).append(constant)

        ordered = sorted(groups.items(), key=lambda item: item[1][0].index)
        return [(_canonical_name(members), value) for value, members in ordered]

    def value_to_name(self) -> Dict[int, str]:
        return {value: name for name, value in self.pairs()}

    def name_to_value(self) -> Dict[str, int]:
        return {name: value for name, value in self.pairs()}


def _canonical_name(members: List[ResolvedConstant]) -> str:
    # Synonyms (``B = A``) defer to the constants they alias.
    candidates = [member for member in members if not member.synonym] or members
    return min(member.name for member in candidates)


@dataclass(frozen=True)
class GenerationRequest:
    type_name: str
    directory: Path


@dataclass
class GenerationResult:
    """Outcome of generating one output file."""

    request: GenerationRequest
    path: Path
    formatted: bool


__all__ = [
    "ConstantEntry",
    "ConstantGroup",
    "ConstantSpec",
    "GenerationRequest",
    "GenerationResult",
    "ResolvedConstant",
    "TypeDecl",
    "ValueTable",
]
