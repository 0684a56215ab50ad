"""Go integer kinds and fixed-width arithmetic helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class IntegerKind:
    """Signedness and bit width of a Go integer type."""

    name: str
    signed: bool
    bits: int

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    def wrap(self, value: int) -> int:
        """Truncate ``value`` to the kind's width, two's complement for signed kinds."""
        value &= self.mask
        if self.signed and value >= 1 << (self.bits - 1):
            value -= 1 << self.bits
        return value

    def complement(self, value: int) -> int:
        if self.signed:
            return ~value
        return value ^ self.mask


# int, uint and uintptr follow the 64-bit platforms go generate usually runs on.
BUILTIN_KINDS: Dict[str, IntegerKind] = {
    "int": IntegerKind("int", True, 64),
    "int8": IntegerKind("int8", True, 8),
    "int16": IntegerKind("int16", True, 16),
    "int32": IntegerKind("int32", True, 32),
    "rune": IntegerKind("rune", True, 32),
    "int64": IntegerKind("int64", True, 64),
    "uint": IntegerKind("uint", False, 64),
    "uint8": IntegerKind("uint8", False, 8),
    "byte": IntegerKind("byte", False, 8),
    "uint16": IntegerKind("uint16", False, 16),
    "uint32": IntegerKind("uint32", False, 32),
    "uint64": IntegerKind("uint64", False, 64),
    "uintptr": IntegerKind("uintptr", False, 64),
}


def builtin_kind(name: str) -> Optional[IntegerKind]:
    return BUILTIN_KINDS.get(name)


def parse_int_literal(text: str) -> int:
    """Parse a Go integer literal, including legacy ``0755`` octal and ``_`` separators."""
    cleaned = text.replace("_", "")
    lowered = cleaned.lower()
    if len(cleaned) > 1 and cleaned.startswith("0") and lowered[1] not in "xob":
        return int(cleaned, 8)
    return int(cleaned, 0)


def truncated_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def truncated_mod(left: int, right: int) -> int:
    return left - right * truncated_div(left, right)


__all__ = [
    "BUILTIN_KINDS",
    "IntegerKind",
    "builtin_kind",
    "parse_int_literal",
    "truncated_div",
    "truncated_mod",
]
