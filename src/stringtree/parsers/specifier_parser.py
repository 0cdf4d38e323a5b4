#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Scanner for printf-style format specifiers in translation strings.

Recognizes the Foundation flavour of printf placeholders, including
``%@`` objects and explicit ``%N$`` argument positions::

    %[N$][flags][width][.precision][length]type

A literal ``%%`` is consumed and never reported. Occurrences whose type
character is not recognized are skipped without raising, so free text
such as ``"50%!"`` passes through untouched.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from stringtree.parsers.parser_types import (
    NO_WIDTH,
    FormatSpecifier,
    SpecifierKind,
    SpecStyle,
    WidthSpec,
)

SPECIFIER_PATTERN = re.compile(
    r"%(?:"
    r"(?P<escaped>%)"
    r"|"
    r"(?:(?P<position>[1-9][0-9]*)\$)?"
    r"(?P<flags>['\-+ #0]*)"
    r"(?P<width>\*(?:[1-9][0-9]*\$)?|[0-9]+)?"
    r"(?P<precision>\.(?:\*(?:[1-9][0-9]*\$)?|[0-9]*))?"
    r"(?P<length>hh|h|ll|l|q|L|z|t|j)?"
    r"(?P<type>[@dDiuUxXoOfFeEgGaAcCp])"
    r")"
)

CONVERSION_KINDS: Dict[str, SpecifierKind] = {
    "@": SpecifierKind.OBJECT,
    "d": SpecifierKind.SIGNED,
    "D": SpecifierKind.SIGNED,
    "i": SpecifierKind.SIGNED,
    "u": SpecifierKind.UNSIGNED,
    "U": SpecifierKind.UNSIGNED,
    "x": SpecifierKind.HEX,
    "X": SpecifierKind.HEX,
    "o": SpecifierKind.OCTAL,
    "O": SpecifierKind.OCTAL,
    "f": SpecifierKind.FLOAT,
    "F": SpecifierKind.FLOAT,
    "e": SpecifierKind.SCIENTIFIC,
    "E": SpecifierKind.SCIENTIFIC,
    "g": SpecifierKind.SCIENTIFIC,
    "G": SpecifierKind.SCIENTIFIC,
    "a": SpecifierKind.HEX_FLOAT,
    "A": SpecifierKind.HEX_FLOAT,
    "c": SpecifierKind.CHARACTER,
    "C": SpecifierKind.UNICHAR,
    "p": SpecifierKind.POINTER,
}


def _parse_star_or_number(raw: str) -> WidthSpec:
    """Convert a width/precision body (``*``, ``*3$``, ``12`` or ``""``).

    Args:
        raw: Matched text without the leading ``.`` of a precision.

    Returns:
        The corresponding WidthSpec. An empty body is a literal 0.
    """
    if raw.startswith("*"):
        position = int(raw[1:-1]) if raw.endswith("$") else None
        return WidthSpec(SpecStyle.STAR, position)
    return WidthSpec(SpecStyle.LITERAL, int(raw) if raw else 0)


def _specifier_from_match(match: "re.Match[str]") -> FormatSpecifier:
    position: Optional[int] = None
    if match.group("position"):
        position = int(match.group("position"))

    width = NO_WIDTH
    if match.group("width") is not None:
        width = _parse_star_or_number(match.group("width"))

    precision = NO_WIDTH
    if match.group("precision") is not None:
        precision = _parse_star_or_number(match.group("precision")[1:])

    conversion = match.group("type")
    return FormatSpecifier(
        kind=CONVERSION_KINDS[conversion],
        conversion=conversion,
        argument_position=position,
        flags=frozenset(match.group("flags") or ""),
        width=width,
        precision=precision,
        length_modifier=match.group("length"),
        text=match.group(0),
        start=match.start(),
    )


def parse_specifiers(text: str) -> List[FormatSpecifier]:
    """Extract every format specifier from a translation string.

    Args:
        text: Base translation to scan.

    Returns:
        Specifiers in left-to-right order. ``%%`` escapes are excluded.
    """
    specifiers: List[FormatSpecifier] = []
    for match in SPECIFIER_PATTERN.finditer(text):
        if match.group("escaped"):
            continue
        specifiers.append(_specifier_from_match(match))
    return specifiers

