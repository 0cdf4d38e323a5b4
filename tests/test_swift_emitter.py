#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Tests for the Swift accessor emitter and the shared emitter behavior.

Usage:
    python -m pytest tests/test_swift_emitter.py -v
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add src to path for imports
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from stringtree.core.core_types import MixedArgumentsError, OutputLanguage, SparsePositionsError
from stringtree.core.key_tree import build_tree
from stringtree.emitters import SwiftEmitter, emit, get_emitter
from stringtree.emitters.base_emitter import BANNER
from stringtree.emitters.emitter_types import EmitterOptions, GenerationError, OptionsError
from stringtree.parsers.parser_types import LocalizationEntry


def tree_of(*pairs):
    return build_tree([LocalizationEntry(key, value) for key, value in pairs])


def render(*pairs, **options):
    return SwiftEmitter(EmitterOptions(**options)).emit(tree_of(*pairs)).implementation


class TestSwiftLayout:
    """Overall file structure."""

    def test_single_constant(self):
        source = render(("title", "Welcome"))

        assert source.startswith(BANNER)
        assert "// MARK: - Imports\n\nimport Foundation\n" in source
        assert "// MARK: - Localizations\n" in source
        assert source.endswith(
            "\npublic struct Localizations {\n"
            "\n"
            "    /// Base translation: Welcome\n"
            '    public static var title : String = NSLocalizedString("title", comment: "")\n'
            "\n"
            "}\n"
        )

    def test_nested_function(self):
        source = render(("login.greeting", "Hello %@"))

        assert (
            "    public struct login {\n"
            "\n"
            "        /// Base translation: Hello %@\n"
            "        public static func greeting(_ value : String) -> String {\n"
            '            return String(format: NSLocalizedString("login.greeting", comment: ""), value)\n'
            "        }\n"
            "\n"
            "    }"
        ) in source

    def test_leaves_render_before_groups(self):
        source = render(("a.x", "1"), ("b", "2"))

        assert source.index("static var b") < source.index("struct a")

    def test_empty_tree(self):
        result = SwiftEmitter().emit(tree_of())

        assert "public struct Localizations {" in result.implementation
        assert result.header is None
        assert result.language is OutputLanguage.SWIFT

    def test_custom_base_class_name(self):
        source = render(("title", "x"), base_class_name="Texts")

        assert "public struct Texts {" in source


class TestSwiftLeaves:
    """Rendering of individual accessors."""

    def test_typed_parameters_in_declared_order(self):
        source = render(("inbox", "Hello %@, you have %d items"))

        assert "public static func inbox(_ value1 : String, _ value2 : Int) -> String {" in source
        assert 'NSLocalizedString("inbox", comment: ""), value1, value2)' in source

    def test_numbered_arguments(self):
        source = render(("score", "%2$@ scored %1$lld"))

        assert "func score(_ value1 : Int64, _ value2 : String)" in source

    def test_table_name(self):
        source = render(("title", "x"), table_name="Onboarding")

        assert 'NSLocalizedString("title", tableName: "Onboarding", comment: "")' in source

    def test_comment_collapses_line_breaks(self):
        source = render(("body", "Line one\nLine two"))

        assert "/// Base translation: Line one Line two\n" in source

    def test_key_is_escaped(self):
        source = render(('say "hi"\\now', "x"))

        assert 'NSLocalizedString("say \\"hi\\"\\\\now", comment: "")' in source

    def test_control_characters_use_unicode_escapes(self):
        source = render(("bell\u0007", "x"))

        assert 'NSLocalizedString("bell\\u{7}", comment: "")' in source


class TestNames:
    """Identifier sanitization through the emitter."""

    def test_reserved_word(self):
        source = render(("class", "x"))

        assert "public static var _class : String" in source

    def test_sibling_collisions(self):
        source = render(("my-key", "1"), ("my_key", "2"), ("a-b", "3"), ("a_b.c", "4"))

        assert "static var my_key : String" in source
        assert "static var my_key_2 : String" in source
        assert "static var a_b : String" in source
        assert "public struct a_b_2 {" in source

    def test_autocapitalize(self):
        source = render(("screen.main_title", "x"), autocapitalize=True)

        assert "public struct Screen {" in source
        assert "public static var MainTitle : String" in source


class TestFailures:
    """Error collection across the whole tree."""

    def test_all_failures_are_collected(self):
        tree = tree_of(("ok", "fine"), ("a.bad", "%1$@ %3$@"), ("worse", "%d %1$d"))

        with pytest.raises(GenerationError) as info:
            SwiftEmitter().emit(tree)

        error = info.value
        assert [f.key for f in error.failures] == ["worse", "a.bad"]
        assert isinstance(error.failures[0], MixedArgumentsError)
        assert isinstance(error.failures[1], SparsePositionsError)
        assert error.failures[1].translation == "%1$@ %3$@"
        assert error.exit_code == 65

    def test_build_model_raises_first_error_without_collector(self):
        with pytest.raises(SparsePositionsError):
            SwiftEmitter().build_model(tree_of(("bad", "%2$@")))

    def test_invalid_base_class_name(self):
        with pytest.raises(OptionsError):
            render(("title", "x"), base_class_name="1Strings")

    def test_blank_table_name(self):
        with pytest.raises(OptionsError):
            render(("title", "x"), table_name="  ")

    def test_reserved_base_class_name(self):
        with pytest.raises(OptionsError) as info:
            render(("title", "x"), base_class_name="class")

        assert "reserved word" in info.value.message
        assert info.value.exit_code == 64


class TestRegistry:

    def test_get_emitter(self):
        emitter = get_emitter(OutputLanguage.SWIFT)

        assert isinstance(emitter, SwiftEmitter)
        assert emitter.options.language is OutputLanguage.SWIFT

    def test_emit_dispatches_on_language(self):
        rendered = emit(tree_of(("t", "x")), EmitterOptions(language=OutputLanguage.OBJC))

        assert rendered.header is not None
