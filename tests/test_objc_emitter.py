#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Tests for the Objective-C header/implementation emitter."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add src to path for imports
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from stringtree.core.core_types import OutputLanguage
from stringtree.core.key_tree import build_tree
from stringtree.emitters import ObjCEmitter
from stringtree.emitters.base_emitter import BANNER
from stringtree.emitters.emitter_types import EmitterOptions, OptionsError
from stringtree.parsers.parser_types import LocalizationEntry

SAMPLE = (("title", "Welcome"), ("login.greeting", "Hello %@, %d new"))


def render(*pairs, **options):
    options.setdefault("language", OutputLanguage.OBJC)
    tree = build_tree([LocalizationEntry(key, value) for key, value in pairs])
    return ObjCEmitter(EmitterOptions(**options)).emit(tree)


class TestHeader:
    """The ``.h`` side."""

    def test_imports_and_macro(self):
        header = render(*SAMPLE).header

        assert header.startswith(BANNER)
        assert "// MARK: - Imports\n\n@import Foundation;\n" in header
        assert "// MARK: - Macros\n" in header
        assert header.endswith(
            "// Make localization to be easily accessible\n"
            "#define Localizations [_Localizations sharedInstance]\n"
        )

    def test_child_class_declared_before_parent(self):
        header = render(*SAMPLE).header

        child = header.index("@interface _Localizationslogin : NSObject")
        parent = header.index("@interface _Localizations : NSObject")
        assert child < parent

    def test_child_class(self):
        header = render(*SAMPLE).header

        assert (
            "@interface _Localizationslogin : NSObject\n"
            "\n"
            "/// Base translation: Hello %@, %d new\n"
            "- (NSString *(^)(NSString *, int))greeting;\n"
            "\n"
            "@end\n"
        ) in header

    def test_root_class_members(self):
        header = render(*SAMPLE).header

        assert (
            "@interface _Localizations : NSObject\n"
            "\n"
            "- (_Localizationslogin *)login;\n"
            "\n"
            "/// Base translation: Welcome\n"
            "- (NSString *)title;\n"
            "\n"
            "+ (_Localizations *)sharedInstance;\n"
            "\n"
            "@end\n"
        ) in header

    def test_custom_superclass(self):
        header = render(*SAMPLE, custom_superclass="BaseStrings").header

        assert '@import Foundation;\n#import "BaseStrings.h"\n' in header
        assert "@interface _Localizations : BaseStrings" in header
        assert "NSObject" not in header

    def test_custom_base_class_name(self):
        header = render(*SAMPLE, base_class_name="Texts").header

        assert "#define Texts [_Texts sharedInstance]" in header
        assert "@interface _Textslogin : NSObject" in header


class TestImplementation:
    """The ``.m`` side."""

    def test_imports_header_by_base_class_name(self):
        implementation = render(*SAMPLE).implementation

        assert implementation.startswith(BANNER)
        assert '#import "Localizations.h"\n' in implementation

    def test_imports_header_by_configured_name(self):
        implementation = render(*SAMPLE, header_filename="Strings").implementation

        assert '#import "Strings.h"\n' in implementation

    def test_constant_accessor(self):
        implementation = render(*SAMPLE).implementation

        assert (
            "- (NSString *)title {\n"
            '    return NSLocalizedStringFromTable(@"title", nil, nil);\n'
            "}\n"
        ) in implementation

    def test_block_accessor(self):
        implementation = render(*SAMPLE).implementation

        assert (
            "- (NSString *(^)(NSString *, int))greeting {\n"
            "    return ^(NSString * value1, int value2) {\n"
            "        return [NSString stringWithFormat: "
            'NSLocalizedStringFromTable(@"login.greeting", nil, nil), value1, value2];\n'
            "    };\n"
            "}\n"
        ) in implementation

    def test_child_property(self):
        implementation = render(*SAMPLE).implementation

        assert (
            "- (_Localizationslogin *)login {\n"
            "    return [_Localizationslogin new];\n"
            "}\n"
        ) in implementation

    def test_shared_instance(self):
        implementation = render(*SAMPLE).implementation

        assert "+ (_Localizations *)sharedInstance {\n" in implementation
        assert "    static dispatch_once_t once;\n" in implementation
        assert "        instance = [[_Localizations alloc] init];\n" in implementation
        assert implementation.endswith("    return instance;\n}\n@end\n\n")

    def test_table_name(self):
        implementation = render(("title", "x"), table_name="Onboarding").implementation

        assert 'NSLocalizedStringFromTable(@"title", @"Onboarding", nil)' in implementation

    def test_control_characters_use_octal_escapes(self):
        implementation = render(("tab\tbell\u0007", "x")).implementation

        assert '@"tab\\tbell\\007"' in implementation


class TestClassNames:

    def test_reserved_words_are_escaped(self):
        header = render(("id", "x")).header

        assert "- (NSString *)_id;" in header

    def test_colliding_class_names_get_suffix(self):
        pairs = (("ab.c.x", "1"), ("a.bc.y", "2"))
        tree = build_tree([LocalizationEntry(key, value) for key, value in pairs])
        emitter = ObjCEmitter(EmitterOptions(language=OutputLanguage.OBJC))

        names = emitter.class_names(emitter.build_model(tree))

        assert names[("ab", "c")] == "_Localizationsabc"
        assert names[("a", "bc")] == "_Localizationsabc_2"
        assert len(set(names.values())) == len(names)


class TestOptions:

    def test_reserved_base_class_name(self):
        with pytest.raises(OptionsError) as info:
            render(("title", "x"), base_class_name="int")

        assert "reserved word in objc" in info.value.message

    def test_reserved_custom_superclass(self):
        with pytest.raises(OptionsError):
            render(("title", "x"), custom_superclass="id")

    def test_swift_keyword_is_allowed_as_objc_name(self):
        header = render(("title", "x"), base_class_name="let").header

        assert "#define let [_let sharedInstance]" in header
