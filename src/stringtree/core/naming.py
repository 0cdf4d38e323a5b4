#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Identifier sanitization for generated structs, classes and accessors."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Collection, FrozenSet

from stringtree.core.core_types import OutputLanguage

SWIFT_RESERVED_WORDS: FrozenSet[str] = frozenset(
    (
        "class", "deinit", "enum", "extension", "func", "import", "init",
        "inout", "internal", "let", "operator", "private", "protocol", "public",
        "static", "struct", "subscript", "typealias", "var", "break", "case",
        "continue", "default", "defer", "do", "else", "fallthrough", "for",
        "guard", "if", "in", "repeat", "return", "switch", "where", "while",
        "as", "catch", "dynamicType", "false", "is", "nil", "rethrows", "super",
        "self", "Self", "throw", "throws", "true", "try", "type", "Any",
        "associatedtype", "fileprivate", "__COLUMN__",
        "__FILE__", "__FUNCTION__", "__LINE__",
    )
)

OBJC_RESERVED_WORDS: FrozenSet[str] = frozenset(
    (
        "auto", "break", "case", "char", "const", "continue", "default", "do",
        "double", "else", "enum", "extern", "float", "for", "goto", "if",
        "inline", "int", "long", "register", "restrict", "return", "short",
        "signed", "sizeof", "static", "struct", "swift", "typedef", "union",
        "unsigned", "void", "volatile", "while", "BOOL", "Class", "bycopy",
        "byref", "id", "IMP", "in", "inout", "nil", "NO", "NULL", "oneway",
        "out", "Protocol", "SEL", "self", "super", "YES",
    )
)

RESERVED_WORDS = {
    OutputLanguage.SWIFT: SWIFT_RESERVED_WORDS,
    OutputLanguage.OBJC: OBJC_RESERVED_WORDS,
}

_SEPARATOR = re.compile(r"_+")


@dataclass(frozen=True)
class NamingContext:
    """Naming rules for one generation run.

    Attributes:
        reserved_words: Identifiers that must be escaped with a ``_`` prefix.
        autocapitalize: CamelCase identifiers built from several pieces.
    """

    reserved_words: FrozenSet[str] = frozenset()
    autocapitalize: bool = False

    @classmethod
    def for_language(
        cls, language: OutputLanguage, autocapitalize: bool = False
    ) -> "NamingContext":
        """Create the context holding ``language``'s reserved words."""
        return cls(RESERVED_WORDS[language], autocapitalize)

    def sanitize(self, segment: str) -> str:
        """Turn a key segment into a legal identifier.

        Non-alphanumeric characters become ``_``. With autocapitalize the
        pieces between them are joined with their first letter upper-cased.
        Names that start with a digit or are reserved get a ``_`` prefix.
        Sanitizing a sanitized name returns it unchanged.

        Args:
            segment: Raw key segment.

        Returns:
            Identifier usable in the target language.
        """
        name = "".join(char if char.isalnum() else "_" for char in segment)
        if self.autocapitalize:
            camel = "".join(
                piece[:1].upper() + piece[1:]
                for piece in _SEPARATOR.split(name)
                if piece
            )
            name = camel or name
        if not name:
            return "_"
        if name[0].isdigit() or name in self.reserved_words:
            name = "_" + name
        return name

    @staticmethod
    def disambiguate(name: str, taken: Collection[str]) -> str:
        """Append ``_2``, ``_3``... until ``name`` is not in ``taken``."""
        if name not in taken:
            return name
        counter = 2
        while f"{name}_{counter}" in taken:
            counter += 1
        return f"{name}_{counter}"
