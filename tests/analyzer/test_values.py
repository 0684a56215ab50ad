"""Tests for resolving enum values from constant groups."""

from __future__ import annotations

import pytest

from tests._fixtures.go_package import PAINKILLER, GoPackageBuilder
from yamlenums.errors import TypeNotFoundError, UnsupportedExpressionError, UnsupportedTypeError


def _values(go_package: GoPackageBuilder, source: str, type_name: str):
    go_package.write({"enum.go": source})
    return go_package.parse().values_of_type(type_name)


def test_painkiller_aliases_collapse_to_canonical_name(go_package: GoPackageBuilder) -> None:
    go_package.write({"pill.go": PAINKILLER})
    package = go_package.parse()

    assert package.values_of_type("Pill") == [
        ("Placebo", 0),
        ("Aspirin", 1),
        ("Ibuprofen", 2),
        ("Paracetamol", 3),
    ]
    table = package.value_table("Pill")
    assert table.value_to_name() == {0: "Placebo", 1: "Aspirin", 2: "Ibuprofen", 3: "Paracetamol"}
    assert table.name_to_value()["Paracetamol"] == 3
    assert "Acetaminophen" not in table.name_to_value()


def test_literal_values_keep_declaration_order(go_package: GoPackageBuilder) -> None:
    values = _values(
        go_package,
        """
        package colors

        type Color uint

        const (
            Red   Color = 7
            Green Color = 3
            Blue  Color = 5
        )
        """,
        "Color",
    )

    assert values == [("Red", 7), ("Green", 3), ("Blue", 5)]


def test_duplicate_literals_pick_lexicographically_smallest_name(
    go_package: GoPackageBuilder,
) -> None:
    values = _values(
        go_package,
        """
        package codes

        type Code int

        const (
            Zero  Code = 0
            Zeta  Code = 1
            Alpha Code = 1
            Mid   Code = 1
        )
        """,
        "Code",
    )

    assert values == [("Zero", 0), ("Alpha", 1)]


def test_canonical_value_keeps_first_appearance_position(go_package: GoPackageBuilder) -> None:
    values = _values(
        go_package,
        """
        package order

        type Step int

        const (
            Second Step = 2
            First  Step = 1
            Deux   Step = 2
        )
        """,
        "Step",
    )

    assert values == [("Deux", 2), ("First", 1)]


def test_untyped_entries_before_first_typed_sibling_are_ignored(
    go_package: GoPackageBuilder,
) -> None:
    values = _values(
        go_package,
        """
        package levels

        type Level int

        const (
            unset = iota
            Low Level = iota
            Medium
            High
        )

        const Unrelated = 42
        """,
        "Level",
    )

    assert values == [("Low", 1), ("Medium", 2), ("High", 3)]


def test_type_inheritance_does_not_cross_groups(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package shapes

            type Shape int

            const (
                Circle Shape = iota
                Square
            )

            const (
                Other = 10
            )
            """,
        }
    )
    package = go_package.parse()

    assert package.values_of_type("Shape") == [("Circle", 0), ("Square", 1)]


def test_bit_flags_use_shifted_iota(go_package: GoPackageBuilder) -> None:
    values = _values(
        go_package,
        """
        package perms

        type Flag uint8

        const (
            Read Flag = 1 << iota
            Write
            Exec
            All = Read | Write | Exec
        )
        """,
        "Flag",
    )

    assert values == [("Read", 1), ("Write", 2), ("Exec", 4), ("All", 7)]


def test_implicit_repetition_supports_multiple_names(go_package: GoPackageBuilder) -> None:
    values = _values(
        go_package,
        """
        package pairs

        type Pair int

        const (
            A, B Pair = iota + 1, iota * 10
            C, D
        )
        """,
        "Pair",
    )

    assert values == [("A", 1), ("B", 0), ("C", 2), ("D", 10)]


def test_values_wrap_to_the_type_width(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package widths

            type Small uint8
            type Tiny int8
            type Derived Small

            const (
                Max      Small = ^Small(0)
                Overflow Small = 256 + 1
            )

            const Negative Tiny = 128

            const Chased Derived = 300
            """,
        }
    )
    package = go_package.parse()

    assert package.values_of_type("Small") == [("Max", 255), ("Overflow", 1)]
    assert package.values_of_type("Tiny") == [("Negative", -128)]
    assert package.values_of_type("Derived") == [("Chased", 44)]


def test_division_truncates_toward_zero(go_package: GoPackageBuilder) -> None:
    values = _values(
        go_package,
        """
        package math

        type Num int

        const (
            Quotient  Num = -7 / 2
            Remainder Num = -7 % 2
            Cleared   Num = 0xF &^ 0x3
        )
        """,
        "Num",
    )

    assert values == [("Quotient", -3), ("Remainder", -1), ("Cleared", 12)]


def test_integer_literal_forms(go_package: GoPackageBuilder) -> None:
    values = _values(
        go_package,
        """
        package literals

        type Mode int

        const (
            Octal  Mode = 0755
            Hex    Mode = 0x1F
            Binary Mode = 0b101
            Big    Mode = 1_000
            Zero   Mode = 0
        )
        """,
        "Mode",
    )

    assert values == [("Octal", 493), ("Hex", 31), ("Binary", 5), ("Big", 1000), ("Zero", 0)]


def test_references_resolve_forward_and_across_groups(go_package: GoPackageBuilder) -> None:
    values = _values(
        go_package,
        """
        package refs

        type Code int

        const (
            First Code = Base + iota
            Second
        )

        const Base = 100
        """,
        "Code",
    )

    assert values == [("First", 100), ("Second", 101)]


def test_missing_type_raises_type_not_found(go_package: GoPackageBuilder) -> None:
    go_package.write({"pill.go": PAINKILLER})
    package = go_package.parse()

    with pytest.raises(TypeNotFoundError):
        package.values_of_type("Tablet")


def test_constants_of_undeclared_type_raise_type_not_found(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package ghost

            const (
                A Phantom = 1
            )
            """,
        }
    )
    package = go_package.parse()

    with pytest.raises(TypeNotFoundError):
        package.values_of_type("Phantom")


def test_non_integer_types_are_rejected(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package labels

            type Label string

            const (
                Foo Label = "foo"
            )
            """,
        }
    )
    package = go_package.parse()

    with pytest.raises(UnsupportedTypeError):
        package.values_of_type("Label")


def test_unsupported_expression_names_the_constant(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package odd

            type Kind int

            const (
                Good Kind = 1
                Bad  Kind = len("abc")
            )
            """,
        }
    )
    package = go_package.parse()

    with pytest.raises(UnsupportedExpressionError) as excinfo:
        package.values_of_type("Kind")

    assert "Bad" in str(excinfo.value)
    assert "enum.go" in str(excinfo.value)


def test_unsupported_constants_of_other_types_do_not_interfere(
    go_package: GoPackageBuilder,
) -> None:
    go_package.write(
        {
            "pill.go": PAINKILLER,
            "names.go": """
            package painkiller

            const Brand = "Generic"
            const Ratio = 1.5
            """,
        }
    )
    package = go_package.parse()

    assert package.values_of_type("Pill")[0] == ("Placebo", 0)


def test_initialization_cycles_are_reported(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package loops

            type Loop int

            const (
                A Loop = B
                B Loop = A
            )
            """,
        }
    )
    package = go_package.parse()

    with pytest.raises(UnsupportedExpressionError) as excinfo:
        package.values_of_type("Loop")

    assert "cycle" in str(excinfo.value)


def test_name_value_count_mismatch_is_unsupported(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package arity

            type Pair int

            const (
                A, B Pair = 1, 2
                C
            )
            """,
        }
    )
    package = go_package.parse()

    with pytest.raises(UnsupportedExpressionError) as excinfo:
        package.values_of_type("Pair")

    assert "C" in str(excinfo.value)


def test_division_by_zero_is_unsupported(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package zero

            type Num int

            const Broken Num = 1 / 0
            """,
        }
    )
    package = go_package.parse()

    with pytest.raises(UnsupportedExpressionError):
        package.values_of_type("Num")


def test_comma_separated_names_keep_only_identifiers(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package pairs

            type Pair int

            const Left, _, Right Pair = 1, 2, 3
            """,
        }
    )
    package = go_package.parse()

    assert [entry.name for entry in package.entries] == ["Left", "_", "Right"]
    assert package.values_of_type("Pair") == [("Left", 1), ("Right", 3)]


def test_references_to_untyped_constants_are_not_synonyms(go_package: GoPackageBuilder) -> None:
    values = _values(
        go_package,
        """
        package codes

        type Code int

        const unknownValue = 0

        const (
            Zero    Code = 0
            Unknown Code = unknownValue
        )
        """,
        "Code",
    )

    assert values == [("Unknown", 0)]


def test_iota_is_not_a_constant_reference(go_package: GoPackageBuilder) -> None:
    go_package.write(
        {
            "enum.go": """
            package levels

            type Level int

            const (
                Low Level = iota
                High
            )
            """,
        }
    )
    package = go_package.parse()

    assert package.constant("iota") is None
    assert [entry.reference for entry in package.entries] == [None, None]
    assert package.values_of_type("Level") == [("Low", 0), ("High", 1)]
