#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Core data types for argument inference and the localization key tree.

Contains the argument model produced by `core.arguments`, the two tree
node variants built by `core.key_tree`, and the inference errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from stringtree.utils.errors import EX_DATAERR, StringTreeError


class ArgumentType(Enum):
    """Value type a format argument must have.

    Members map one-to-one onto C/Foundation types; emitters translate them
    into the target language's spelling.
    """

    OBJECT = "object"
    CHAR = "char"
    UNICHAR = "unichar"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    LONG = "long"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    ULONG = "ulong"
    UINT64 = "uint64"
    DOUBLE = "double"
    POINTER = "pointer"


class ArgumentRole(Enum):
    """What an argument supplies to the specifier group(s) it belongs to."""

    VALUE = "value"
    WIDTH = "width"
    PRECISION = "precision"


@dataclass(frozen=True)
class InferredArgument:
    """A parameter of a generated accessor function.

    Attributes:
        name: Parameter name (``value1``, ``width``, ``options2``...).
        type: Required argument type.
        groups: Specifier groups this argument feeds.
        position: 1-based position in the argument list.
        roles: Roles the argument plays across all specifiers.
    """

    name: str
    type: ArgumentType
    groups: FrozenSet[int]
    position: int
    roles: FrozenSet[ArgumentRole] = field(default_factory=frozenset)


@dataclass
class Leaf:
    """Tree node holding one translation.

    Attributes:
        key: Original, undelimited localization key.
        value: Base translation.
    """

    key: str
    value: str


@dataclass
class Group:
    """Tree node holding named children in first-insertion order."""

    children: Dict[str, "TreeNode"] = field(default_factory=dict)

    def leaves(self) -> List[Tuple[str, Leaf]]:
        """Return direct leaf children as ``(segment, leaf)`` pairs."""
        return [(n, c) for n, c in self.children.items() if isinstance(c, Leaf)]

    def groups(self) -> List[Tuple[str, "Group"]]:
        """Return direct group children as ``(segment, group)`` pairs."""
        return [(n, c) for n, c in self.children.items() if isinstance(c, Group)]

    def __len__(self) -> int:
        return len(self.children)


TreeNode = Union[Leaf, Group]


class ArgumentInferenceError(StringTreeError):
    """Base class for strings whose specifiers cannot be turned into arguments.

    Attributes:
        key: Localization key of the offending entry, once known.
        translation: Offending translation string, once known.
    """

    exit_code = EX_DATAERR

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(message, details)
        self.key: Optional[str] = None
        self.translation: Optional[str] = None

    def attach(self, key: str, translation: str) -> "ArgumentInferenceError":
        """Record the entry the error belongs to and return self."""
        self.key = key
        self.translation = translation
        return self

    def __str__(self) -> str:
        if self.key is None:
            return self.message
        return f"{self.message} (key '{self.key}', translation \"{self.translation}\")"


class MixedArgumentsError(ArgumentInferenceError):
    """Raised when numbered and unnumbered specifiers share one string."""

    def __init__(self, specifier_text: str) -> None:
        super().__init__(
            f"Numbered and unnumbered arguments are mixed at '{specifier_text}'",
            {"specifier": specifier_text},
        )
        self.specifier_text = specifier_text


class ConflictingTypesError(ArgumentInferenceError):
    """Raised when one argument position is used with incompatible types."""

    def __init__(
        self, position: int, first: ArgumentType, second: ArgumentType
    ) -> None:
        super().__init__(
            f"Argument {position} is used as both {first.value} and {second.value}",
            {"position": position, "types": (first.value, second.value)},
        )
        self.position = position
        self.first = first
        self.second = second


class SparsePositionsError(ArgumentInferenceError):
    """Raised when explicit argument positions leave gaps.

    Only the first few missing positions are listed; ``missing_count``
    holds the full number.
    """

    MAX_LISTED = 10

    def __init__(self, missing: List[int], missing_count: Optional[int] = None) -> None:
        missing = list(missing[: self.MAX_LISTED])
        count = len(missing) if missing_count is None else missing_count
        listed = ", ".join(str(p) for p in missing)
        if count > len(missing):
            listed += f" and {count - len(missing)} more"
        super().__init__(
            f"Argument positions are not contiguous; missing {listed}",
            {"missing": missing, "missing_count": count},
        )
        self.missing = missing
        self.missing_count = count


class OutputLanguage(Enum):
    """Target language of the generated accessors."""

    SWIFT = "swift"
    OBJC = "objc"

    @classmethod
    def from_name(cls, name: str) -> "OutputLanguage":
        """Resolve a case-insensitive language name.

        Raises:
            ValueError: If the name is not a supported language.
        """
        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unsupported language '{name}'. Choose one of: {choices}")
