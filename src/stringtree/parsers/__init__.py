"""Parsers for localization tables and printf-style format specifiers."""

from .parser_types import (
    FormatSpecifier,
    InputError,
    InputFormatError,
    InputNotFoundError,
    LocalizationEntry,
    SpecifierKind,
    SpecStyle,
    WidthSpec,
)
from .specifier_parser import parse_specifiers
from .strings_parser import load_strings_table, parse_strings_text

__all__ = [
    "FormatSpecifier",
    "InputError",
    "InputFormatError",
    "InputNotFoundError",
    "LocalizationEntry",
    "SpecStyle",
    "SpecifierKind",
    "WidthSpec",
    "load_strings_table",
    "parse_specifiers",
    "parse_strings_text",
]
