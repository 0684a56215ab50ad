"""Evaluator for the constant expressions found in enumeration blocks.

Only a closed set of node kinds is understood: integer literals, ``iota``,
references to other package constants, parentheses, unary ``+ - ^``,
the integer binary operators and conversions to integer types. Anything
else raises :class:`UnsupportedExpressionError` rather than guessing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Optional, Set

from tree_sitter import Node

from ..errors import UnsupportedExpressionError
from ..models import ConstantEntry
from .integers import IntegerKind, builtin_kind, parse_int_literal, truncated_div, truncated_mod

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .package import Package

_MAX_SHIFT = 1024

_ARITHMETIC: Dict[str, Callable[[int, int], int]] = {
    "+": lambda left, right: left + right,
    "-": lambda left, right: left - right,
    "*": lambda left, right: left * right,
    "&": lambda left, right: left & right,
    "|": lambda left, right: left | right,
    "^": lambda left, right: left ^ right,
    "&^": lambda left, right: left & ~right,
}


class ConstantEvaluator:
    """Resolves constant entries to integers, memoizing across lookups."""

    def __init__(self, package: "Package") -> None:
        self._package = package
        self._values: Dict[int, int] = {}
        self._active: Set[int] = set()

    def value_of(self, entry: ConstantEntry) -> int:
        cached = self._values.get(entry.index)
        if cached is not None:
            return cached
        if entry.index in self._active:
            raise UnsupportedExpressionError(
                f"constant {entry.name} ({entry.position}): initialization cycle"
            )
        if entry.problem is not None:
            raise UnsupportedExpressionError(
                f"constant {entry.name} ({entry.position}): {entry.problem}"
            )
        if entry.expression is None:
            raise UnsupportedExpressionError(
                f"constant {entry.name} ({entry.position}): missing value expression"
            )

        kind = self._package.lookup_kind(entry.type_name) if entry.type_name else None
        self._active.add(entry.index)
        try:
            value = self._evaluate(entry.expression, entry, kind)
        finally:
            self._active.discard(entry.index)

        if kind is not None:
            value = kind.wrap(value)
        self._values[entry.index] = value
        return value

    def _evaluate(self, node: Node, entry: ConstantEntry, kind: Optional[IntegerKind]) -> int:
        node_type = node.type
        if node_type == "int_literal":
            return parse_int_literal(_text(node))
        if node_type == "iota":
            return entry.iota
        if node_type == "identifier":
            return self._reference(node, entry)
        if node_type == "parenthesized_expression":
            inner = [child for child in node.named_children if child.type != "comment"]
            if len(inner) != 1:
                raise self._unsupported(node, entry)
            return self._evaluate(inner[0], entry, kind)
        if node_type == "unary_expression":
            return self._unary(node, entry, kind)
        if node_type == "binary_expression":
            return self._binary(node, entry, kind)
        if node_type == "call_expression":
            return self._conversion(node, entry)
        if node_type == "type_conversion_expression":
            return self._typed_conversion(node, entry)
        raise self._unsupported(node, entry)

    def _reference(self, node: Node, entry: ConstantEntry) -> int:
        name = _text(node)
        target = self._package.constant(name)
        if target is None:
            raise UnsupportedExpressionError(
                f"constant {entry.name} ({entry.position}): undefined constant {name}"
            )
        return self.value_of(target)

    def _unary(self, node: Node, entry: ConstantEntry, kind: Optional[IntegerKind]) -> int:
        operator = node.child_by_field_name("operator")
        operand = node.child_by_field_name("operand")
        if operator is None or operand is None:
            raise self._unsupported(node, entry)
        value = self._evaluate(operand, entry, kind)
        if operator.type == "+":
            return value
        if operator.type == "-":
            return -value
        if operator.type == "^":
            return kind.complement(value) if kind is not None else ~value
        raise self._unsupported(node, entry)

    def _binary(self, node: Node, entry: ConstantEntry, kind: Optional[IntegerKind]) -> int:
        left_node = node.child_by_field_name("left")
        operator = node.child_by_field_name("operator")
        right_node = node.child_by_field_name("right")
        if left_node is None or operator is None or right_node is None:
            raise self._unsupported(node, entry)

        op = operator.type
        if op not in _ARITHMETIC and op not in {"/", "%", "<<", ">>"}:
            raise self._unsupported(node, entry)
        left = self._evaluate(left_node, entry, kind)
        right = self._evaluate(right_node, entry, kind)

        if op in _ARITHMETIC:
            return _ARITHMETIC[op](left, right)
        if op in {"/", "%"}:
            if right == 0:
                raise UnsupportedExpressionError(
                    f"constant {entry.name} ({entry.position}): division by zero"
                )
            return truncated_div(left, right) if op == "/" else truncated_mod(left, right)
        if right < 0:
            raise UnsupportedExpressionError(
                f"constant {entry.name} ({entry.position}): negative shift count {right}"
            )
        if right > _MAX_SHIFT:
            raise UnsupportedExpressionError(
                f"constant {entry.name} ({entry.position}): shift count {right} too large"
            )
        return left << right if op == "<<" else left >> right

    def _conversion(self, node: Node, entry: ConstantEntry) -> int:
        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if function is None or arguments is None or function.type != "identifier":
            raise self._unsupported(node, entry)
        target_name = _text(function)
        target = self._package.lookup_kind(target_name) or builtin_kind(target_name)
        args = [child for child in arguments.named_children if child.type != "comment"]
        if target is None or len(args) != 1:
            raise self._unsupported(node, entry)
        return target.wrap(self._evaluate(args[0], entry, target))

    def _typed_conversion(self, node: Node, entry: ConstantEntry) -> int:
        type_node = node.child_by_field_name("type")
        operand = node.child_by_field_name("operand")
        if type_node is None or operand is None or type_node.type != "type_identifier":
            raise self._unsupported(node, entry)
        target_name = _text(type_node)
        target = self._package.lookup_kind(target_name) or builtin_kind(target_name)
        if target is None:
            raise self._unsupported(node, entry)
        return target.wrap(self._evaluate(operand, entry, target))

    @staticmethod
    def _unsupported(node: Node, entry: ConstantEntry) -> UnsupportedExpressionError:
        return UnsupportedExpressionError(
            f"constant {entry.name} ({entry.position}): unsupported expression "
            f"{_text(node)!r} ({node.type})"
        )


def _text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


__all__ = ["ConstantEvaluator"]
