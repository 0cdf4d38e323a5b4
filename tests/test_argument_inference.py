#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Tests for accessor parameter inference.

Usage:
    python -m pytest tests/test_argument_inference.py -v
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add src to path for imports
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from stringtree.core.arguments import argument_type_for, infer_arguments, infer_arguments_for_text
from stringtree.core.core_types import (
    ArgumentRole,
    ArgumentType,
    ConflictingTypesError,
    MixedArgumentsError,
    SparsePositionsError,
)
from stringtree.parsers.specifier_parser import parse_specifiers


class TestUnnumbered:
    """Left-to-right argument consumption."""

    def test_no_specifiers(self):
        assert infer_arguments_for_text("Plain text") == []
        assert infer_arguments([]) == []

    def test_two_values(self):
        args = infer_arguments_for_text("Hello %@, you have %d items")

        assert [a.type for a in args] == [ArgumentType.OBJECT, ArgumentType.INT]
        assert [a.groups for a in args] == [frozenset({1}), frozenset({2})]
        assert [a.name for a in args] == ["value1", "value2"]
        assert [a.position for a in args] == [1, 2]

    def test_single_value_has_no_suffix(self):
        (arg,) = infer_arguments_for_text("Hello %@")

        assert arg.name == "value"
        assert arg.roles == frozenset({ArgumentRole.VALUE})

    def test_star_width_precedes_value(self):
        args = infer_arguments_for_text("%*d")

        assert [a.name for a in args] == ["width", "value"]
        assert [a.type for a in args] == [ArgumentType.INT, ArgumentType.INT]
        assert all(a.groups == frozenset({1}) for a in args)

    def test_width_and_precision_in_second_group(self):
        args = infer_arguments_for_text("%@ costs %*.*f")

        assert [a.name for a in args] == ["value1", "width2", "precision2", "value2"]
        assert args[-1].type is ArgumentType.DOUBLE
        assert [a.groups for a in args[1:]] == [frozenset({2})] * 3

    def test_numbered_after_unnumbered_is_mixed(self):
        with pytest.raises(MixedArgumentsError) as info:
            infer_arguments_for_text("%@ and %1$@")

        assert info.value.specifier_text == "%1$@"

    def test_positional_star_in_unnumbered_is_mixed(self):
        with pytest.raises(MixedArgumentsError):
            infer_arguments_for_text("%*1$d")


class TestNumbered:
    """Explicit ``%N$`` positions."""

    def test_repeated_position_is_one_argument(self):
        args = infer_arguments_for_text("%1$@ has %1$@'s items")

        assert len(args) == 1
        assert args[0].type is ArgumentType.OBJECT
        assert args[0].name == "value"

    def test_positions_define_order(self):
        args = infer_arguments_for_text("%2$@ scored %1$d")

        assert [a.type for a in args] == [ArgumentType.INT, ArgumentType.OBJECT]
        assert [a.name for a in args] == ["value1", "value2"]
        assert [a.groups for a in args] == [frozenset({1}), frozenset({2})]

    def test_conflicting_types(self):
        with pytest.raises(ConflictingTypesError) as info:
            infer_arguments_for_text("%1$d and %1$@")

        assert info.value.position == 1
        assert info.value.first is ArgumentType.INT
        assert info.value.second is ArgumentType.OBJECT

    def test_sparse_positions(self):
        with pytest.raises(SparsePositionsError) as info:
            infer_arguments_for_text("%1$@ %3$@")

        assert info.value.missing == [2]

    def test_huge_position_reports_a_bounded_gap(self):
        with pytest.raises(SparsePositionsError) as info:
            infer_arguments_for_text("%30000000$@")

        error = info.value
        assert error.missing == list(range(1, SparsePositionsError.MAX_LISTED + 1))
        assert error.missing_count == 29999999
        assert len(error.message) < 200
        assert error.message.endswith("and 29999989 more")

    def test_unnumbered_after_numbered_is_mixed(self):
        with pytest.raises(MixedArgumentsError):
            infer_arguments_for_text("%1$@ %@")

    def test_bare_star_in_numbered_is_mixed(self):
        with pytest.raises(MixedArgumentsError):
            infer_arguments_for_text("%1$*d")

    def test_width_position_joins_value_group(self):
        args = infer_arguments_for_text("%1$*2$d")

        assert [a.name for a in args] == ["value", "width"]
        assert args[1].type is ArgumentType.INT
        assert args[1].roles == frozenset({ArgumentRole.WIDTH})
        assert args[1].groups == frozenset({1})

    def test_shared_width_and_precision_is_options(self):
        args = infer_arguments_for_text("%1$*3$.*3$f %2$@")

        assert [a.name for a in args] == ["value1", "value2", "options1"]
        assert args[2].roles == frozenset({ArgumentRole.WIDTH, ArgumentRole.PRECISION})

    def test_width_position_conflicting_with_value(self):
        with pytest.raises(ConflictingTypesError):
            infer_arguments_for_text("%1$*2$d %2$@")

    def test_names_are_deterministic(self):
        text = "%2$@ %1$*3$d"

        assert infer_arguments_for_text(text) == infer_arguments_for_text(text)


class TestArgumentTypes:
    """Conversion and length modifier to type mapping."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("%d", ArgumentType.INT),
            ("%i", ArgumentType.INT),
            ("%hhd", ArgumentType.INT8),
            ("%hd", ArgumentType.INT16),
            ("%ld", ArgumentType.LONG),
            ("%lld", ArgumentType.INT64),
            ("%qd", ArgumentType.INT64),
            ("%u", ArgumentType.UINT),
            ("%hu", ArgumentType.UINT16),
            ("%lu", ArgumentType.ULONG),
            ("%zu", ArgumentType.ULONG),
            ("%llu", ArgumentType.UINT64),
            ("%x", ArgumentType.UINT),
            ("%lX", ArgumentType.ULONG),
            ("%o", ArgumentType.UINT),
            ("%D", ArgumentType.LONG),
            ("%U", ArgumentType.ULONG),
            ("%O", ArgumentType.ULONG),
            ("%qU", ArgumentType.UINT64),
            ("%f", ArgumentType.DOUBLE),
            ("%Lf", ArgumentType.DOUBLE),
            ("%g", ArgumentType.DOUBLE),
            ("%a", ArgumentType.DOUBLE),
            ("%c", ArgumentType.CHAR),
            ("%C", ArgumentType.UNICHAR),
            ("%p", ArgumentType.POINTER),
            ("%@", ArgumentType.OBJECT),
        ],
    )
    def test_type_mapping(self, text, expected):
        (spec,) = parse_specifiers(text)

        assert argument_type_for(spec) is expected


class TestErrorContext:
    """Errors carry the entry they belong to once attached."""

    def test_attach_adds_key_and_translation(self):
        with pytest.raises(SparsePositionsError) as info:
            infer_arguments_for_text("%2$@")

        error = info.value
        assert error.key is None
        assert str(error) == error.message

        error.attach("profile.title", "%2$@")
        assert error.key == "profile.title"
        assert "profile.title" in str(error)
        assert "%2$@" in str(error)
