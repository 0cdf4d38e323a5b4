#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Data types and exceptions shared by the input and specifier parsers.

Defines the raw table row (`LocalizationEntry`), the parsed form of a
printf-style placeholder (`FormatSpecifier`) and the errors raised while
loading a localization table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from stringtree.utils.errors import EX_IOERR, StringTreeError


@dataclass(frozen=True)
class LocalizationEntry:
    """A single row of the flat localization table.

    Attributes:
        key: Delimited localization key (e.g. ``screen.button.title``).
        value: Base translation text.
    """

    key: str
    value: str


class SpecifierKind(Enum):
    """Semantic category of a conversion character."""

    OBJECT = "object"
    SIGNED = "signed"
    UNSIGNED = "unsigned"
    HEX = "hex"
    OCTAL = "octal"
    FLOAT = "float"
    SCIENTIFIC = "scientific"
    HEX_FLOAT = "hex_float"
    CHARACTER = "character"
    UNICHAR = "unichar"
    POINTER = "pointer"


class SpecStyle(Enum):
    """How a width or precision is supplied."""

    NONE = "none"
    LITERAL = "literal"
    STAR = "star"


@dataclass(frozen=True)
class WidthSpec:
    """Width or precision portion of a specifier.

    Attributes:
        style: Whether the value is absent, a literal, or read from an argument.
        value: Literal number for ``LITERAL``; the explicit argument position
            for ``*N$``; None for a bare ``*`` or ``NONE``.
    """

    style: SpecStyle = SpecStyle.NONE
    value: Optional[int] = None

    @property
    def is_parameterized(self) -> bool:
        """True when the width/precision is taken from an argument."""
        return self.style is SpecStyle.STAR

    @property
    def position(self) -> Optional[int]:
        """Explicit argument position of a ``*N$`` reference, if any."""
        return self.value if self.style is SpecStyle.STAR else None


PrecisionSpec = WidthSpec

NO_WIDTH = WidthSpec()


@dataclass(frozen=True)
class FormatSpecifier:
    """One ``%...`` placeholder found in a translation string.

    Attributes:
        argument_position: Explicit 1-based position for ``%N$`` forms.
        flags: Flag characters (``'``, ``-``, ``+``, space, ``#``, ``0``).
        width: Field width.
        precision: Precision; an empty ``.`` yields a literal 0.
        length_modifier: ``hh``, ``h``, ``l``, ``ll``, ``q``, ``L``, ``z``,
            ``t`` or ``j`` when present.
        kind: Semantic category of the conversion character.
        conversion: The conversion character itself (``d``, ``@``, ...).
        text: Exact source text of the specifier.
        start: Offset of the ``%`` within the translation string.
    """

    kind: SpecifierKind
    conversion: str
    argument_position: Optional[int] = None
    flags: FrozenSet[str] = field(default_factory=frozenset)
    width: WidthSpec = NO_WIDTH
    precision: PrecisionSpec = NO_WIDTH
    length_modifier: Optional[str] = None
    text: str = ""
    start: int = 0

    @property
    def is_numbered(self) -> bool:
        """True when the specifier names its argument position explicitly."""
        return self.argument_position is not None


class InputError(StringTreeError):
    """Base class for problems with the localization table file."""

    exit_code = EX_IOERR


class InputNotFoundError(InputError):
    """Raised when the input file does not exist or cannot be read."""

    def __init__(self, path: str, reason: str = "file not found") -> None:
        super().__init__(f"Cannot read input file '{path}': {reason}", {"path": path})
        self.path = path


class InputFormatError(InputError):
    """Raised when the input file is not a flat string dictionary."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        location = ""
        if path:
            location = f"{path}:{line}: " if line else f"{path}: "
        elif line:
            location = f"line {line}: "
        super().__init__(
            f"Bad format of input file: {location}{message}",
            {"path": path, "line": line},
        )
        self.path = path
        self.line = line
