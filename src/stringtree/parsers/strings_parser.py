#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Loader for flat localization tables.

Accepts the formats Foundation reads into a string dictionary:

* old-style ``.strings`` text (``"key" = "value";`` with C comments),
* XML or binary property lists with a top-level ``<dict>``,
* a flat JSON object (``.json`` files).

Every format is reduced to an ordered list of `LocalizationEntry` rows.
Duplicate keys keep their first position and the last value, mirroring
dictionary assignment.
"""

from __future__ import annotations

import codecs
import json
import logging
import plistlib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from stringtree.parsers.parser_types import (
    InputFormatError,
    InputNotFoundError,
    LocalizationEntry,
)

logger = logging.getLogger(__name__)

# Characters allowed in unquoted old-style plist strings.
UNQUOTED_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$+/:.-"
)

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


class _StringsScanner:
    """Cursor over old-style plist text with line tracking."""

    def __init__(self, text: str, path: Optional[str] = None) -> None:
        self.text = text
        self.path = path
        self.pos = 0
        self.line = 1

    def error(self, message: str) -> InputFormatError:
        return InputFormatError(message, path=self.path, line=self.line)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def advance(self, count: int = 1) -> str:
        chunk = self.text[self.pos : self.pos + count]
        self.line += chunk.count("\n")
        self.pos += count
        return chunk

    def skip_trivia(self) -> None:
        """Skip whitespace, ``/* */`` block comments and ``//`` line comments."""
        while not self.at_end():
            char = self.peek()
            if char.isspace():
                self.advance()
            elif self.text.startswith("/*", self.pos):
                end = self.text.find("*/", self.pos + 2)
                if end < 0:
                    raise self.error("unterminated comment")
                self.advance(end + 2 - self.pos)
            elif self.text.startswith("//", self.pos):
                end = self.text.find("\n", self.pos)
                self.advance((end if end >= 0 else len(self.text)) - self.pos)
            else:
                return

    def expect(self, char: str) -> None:
        self.skip_trivia()
        if self.peek() != char:
            found = self.peek() or "end of file"
            raise self.error(f"expected '{char}' but found '{found}'")
        self.advance()

    def read_string(self) -> str:
        """Read a quoted or unquoted string token."""
        self.skip_trivia()
        char = self.peek()
        if char == '"':
            return self._read_quoted()
        if char and char in UNQUOTED_CHARS:
            start = self.pos
            while self.peek() and self.peek() in UNQUOTED_CHARS:
                self.advance()
            return self.text[start : self.pos]
        raise self.error(f"expected a string but found '{char or 'end of file'}'")

    def _read_quoted(self) -> str:
        start_line = self.line
        self.advance()
        parts: List[str] = []
        while True:
            if self.at_end():
                self.line = start_line
                raise self.error("unterminated string")
            char = self.advance()
            if char == '"':
                return "".join(parts)
            if char == "\\":
                parts.append(self._read_escape())
            else:
                parts.append(char)

    def _read_escape(self) -> str:
        if self.at_end():
            raise self.error("unterminated escape sequence")
        char = self.advance()
        if char in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[char]
        if char in "Uu":
            code = self._read_hex4(char)
            if 0xDC00 <= code <= 0xDFFF:
                raise self.error(f"unpaired low surrogate '\\{char}{code:04X}'")
            if 0xD800 <= code <= 0xDBFF:
                # Non-BMP characters are written as a \U high/low surrogate pair.
                marker = self.text[self.pos : self.pos + 2]
                if marker not in ("\\U", "\\u"):
                    raise self.error(f"unpaired high surrogate '\\{char}{code:04X}'")
                self.advance(2)
                low = self._read_hex4(marker[1])
                if not 0xDC00 <= low <= 0xDFFF:
                    raise self.error(f"unpaired high surrogate '\\{char}{code:04X}'")
                code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
            return chr(code)
        if char in "01234567":
            digits = char
            while len(digits) < 3 and self.peek() and self.peek() in "01234567":
                digits += self.advance()
            return chr(int(digits, 8))
        return char

    def _read_hex4(self, marker: str) -> int:
        digits = self.text[self.pos : self.pos + 4]
        if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
            raise self.error(f"invalid unicode escape '\\{marker}{digits}'")
        self.advance(4)
        return int(digits, 16)


def _decode_text(data: bytes) -> str:
    """Decode .strings bytes, honouring UTF-16/UTF-8 byte order marks."""
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16")
    return data.decode("utf-8-sig")


def parse_strings_text(text: str, path: Optional[str] = None) -> List[LocalizationEntry]:
    """Parse old-style ``.strings`` content.

    The body may optionally be wrapped in ``{ }``. ``"key";`` without a value
    maps the key to itself.

    Args:
        text: Decoded file contents.
        path: Source path used in error messages.

    Returns:
        Entries in file order.

    Raises:
        InputFormatError: On any syntax error, with the offending line.
    """
    scanner = _StringsScanner(text, path)
    table: Dict[str, str] = {}

    scanner.skip_trivia()
    braced = scanner.peek() == "{"
    if braced:
        scanner.advance()

    while True:
        scanner.skip_trivia()
        if braced and scanner.peek() == "}":
            scanner.advance()
            scanner.skip_trivia()
            if not scanner.at_end():
                raise scanner.error("unexpected content after closing brace")
            break
        if scanner.at_end():
            if braced:
                raise scanner.error("missing closing brace")
            break

        key = scanner.read_string()
        scanner.skip_trivia()
        if scanner.peek() == ";":
            scanner.advance()
            table[key] = key
            continue
        scanner.expect("=")
        value = scanner.read_string()
        scanner.expect(";")
        table[key] = value

    return [LocalizationEntry(key, value) for key, value in table.items()]


def entries_from_mapping(
    mapping: Any, path: Optional[str] = None
) -> List[LocalizationEntry]:
    """Validate a decoded plist/JSON object and convert it to entries.

    Args:
        mapping: Decoded top-level object.
        path: Source path used in error messages.

    Returns:
        Entries in mapping order. Non-string keys are skipped.

    Raises:
        InputFormatError: If the root is not a dictionary or a value is not
            a string, or if text holds an unpaired surrogate.
    """
    if not isinstance(mapping, Mapping):
        raise InputFormatError(
            f"top-level object must be a dictionary, not {type(mapping).__name__}",
            path=path,
        )

    entries: List[LocalizationEntry] = []
    for key, value in mapping.items():
        if not isinstance(key, str):
            logger.debug("Skipping non-string key %r", key)
            continue
        if not isinstance(value, str):
            raise InputFormatError(
                f"value for key '{key}' must be a string, not {type(value).__name__}",
                path=path,
            )
        try:
            key.encode("utf-8")
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InputFormatError(
                f"entry '{key!r}' contains an unpaired surrogate ({exc.reason})",
                path=path,
            ) from exc
        entries.append(LocalizationEntry(key, value))
    return entries


def load_strings_table(path: Path | str) -> List[LocalizationEntry]:
    """Read a localization table from disk.

    The format is chosen from the file contents (binary/XML plist) or the
    ``.json`` extension; anything else is parsed as ``.strings`` text.

    Args:
        path: Input file path.

    Returns:
        Every entry in the table.

    Raises:
        InputNotFoundError: If the file is missing or unreadable.
        InputFormatError: If the contents are not a flat string table.
    """
    file_path = Path(path)
    display = str(file_path)
    if not file_path.is_file():
        raise InputNotFoundError(display)
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise InputNotFoundError(display, exc.strerror or str(exc)) from exc

    stripped = data.lstrip()
    if data.startswith(b"bplist") or stripped.startswith((b"<?xml", b"<plist", b"<!DOCTYPE")):
        try:
            mapping = plistlib.loads(data)
        except Exception as exc:
            # plistlib reports malformed XML bodies with assorted exception types.
            reason = str(exc) or type(exc).__name__
            raise InputFormatError(f"invalid property list ({reason})", path=display) from exc
        entries = entries_from_mapping(mapping, display)
    elif file_path.suffix.lower() == ".json":
        try:
            mapping = json.loads(data.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise InputFormatError(str(exc), path=display) from exc
        entries = entries_from_mapping(mapping, display)
    else:
        try:
            text = _decode_text(data)
        except UnicodeDecodeError as exc:
            raise InputFormatError(f"cannot decode text ({exc.reason})", path=display) from exc
        entries = parse_strings_text(text, display)

    logger.debug("Loaded %d entries from %s", len(entries), display)
    return entries
