#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Configuration, render model and result types for code emitters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from stringtree.core.core_types import ArgumentInferenceError, InferredArgument, OutputLanguage
from stringtree.core.naming import RESERVED_WORDS
from stringtree.utils.errors import EX_DATAERR, EX_IOERR, EX_USAGE, StringTreeError

DEFAULT_BASE_CLASS_NAME = "Localizations"


class OptionsError(StringTreeError):
    """Raised when emitter options are invalid."""

    exit_code = EX_USAGE


@dataclass
class EmitterOptions:
    """Settings that shape the generated code.

    Attributes:
        language: Target language.
        base_class_name: Name of the root struct/class and the ObjC macro.
        table_name: Strings table to look keys up in; None for the default
            ``Localizable`` table.
        custom_superclass: Superclass for generated ObjC classes instead of
            ``NSObject``; its header is imported as ``"<name>.h"``.
        autocapitalize: CamelCase generated identifiers.
        header_filename: Base name of the ObjC header imported by the
            implementation file; defaults to the base class name.
    """

    language: OutputLanguage = OutputLanguage.SWIFT
    base_class_name: str = DEFAULT_BASE_CLASS_NAME
    table_name: Optional[str] = None
    custom_superclass: Optional[str] = None
    autocapitalize: bool = False
    header_filename: Optional[str] = None

    def validate(self) -> None:
        """Check option values.

        Raises:
            OptionsError: If a name option is empty, not an identifier or a
                reserved word of the target language.
        """
        reserved = RESERVED_WORDS[self.language]
        if not self.base_class_name or not self.base_class_name.isidentifier():
            raise OptionsError(
                f"Base class name '{self.base_class_name}' is not a valid identifier."
            )
        if self.base_class_name in reserved:
            raise OptionsError(
                f"Base class name '{self.base_class_name}' is a reserved word in "
                f"{self.language.value}."
            )
        if self.custom_superclass is not None:
            if not self.custom_superclass.isidentifier():
                raise OptionsError(
                    f"Custom superclass '{self.custom_superclass}' is not a valid identifier."
                )
            if self.custom_superclass in reserved:
                raise OptionsError(
                    f"Custom superclass '{self.custom_superclass}' is a reserved word in "
                    f"{self.language.value}."
                )
        if self.table_name is not None and not self.table_name.strip():
            raise OptionsError("Strings table name must not be empty.")


@dataclass
class LeafModel:
    """A translation ready for rendering.

    Attributes:
        name: Sanitized, sibling-unique accessor name.
        key: Original localization key.
        value: Original base translation.
        arguments: Inferred parameters; empty for constant accessors.
    """

    name: str
    key: str
    value: str
    arguments: List[InferredArgument] = field(default_factory=list)

    @property
    def is_function(self) -> bool:
        """True when the accessor takes parameters."""
        return bool(self.arguments)

    @property
    def comment(self) -> str:
        """Base translation collapsed onto one line for doc comments."""
        return " ".join(self.value.splitlines())


@dataclass
class GroupModel:
    """A namespace ready for rendering.

    Attributes:
        name: Sanitized, sibling-unique type name.
        path: Names from the root (exclusive) down to this group.
        leaves: Accessors in input order.
        groups: Nested namespaces in input order.
    """

    name: str
    path: Tuple[str, ...] = ()
    leaves: List[LeafModel] = field(default_factory=list)
    groups: List["GroupModel"] = field(default_factory=list)

    def walk(self):
        """Yield this group and every nested group depth-first."""
        yield self
        for child in self.groups:
            yield from child.walk()


@dataclass
class RenderedSource:
    """Fully rendered output of one generation run.

    Attributes:
        language: Language the code was rendered for.
        implementation: Main source file (``.swift`` or ``.m``).
        header: ObjC header contents; None for Swift.
    """

    language: OutputLanguage
    implementation: str
    header: Optional[str] = None


class GenerationError(StringTreeError):
    """Raised when one or more translations cannot be turned into accessors.

    Attributes:
        failures: The per-entry inference errors, in tree order.
    """

    exit_code = EX_DATAERR

    def __init__(self, failures: Sequence[ArgumentInferenceError]) -> None:
        count = len(failures)
        noun = "entry" if count == 1 else "entries"
        super().__init__(
            f"Cannot generate accessors: {count} {noun} with invalid format arguments",
            {"keys": [f.key for f in failures]},
        )
        self.failures = list(failures)


class OutputError(StringTreeError):
    """Raised when generated code cannot be written."""

    exit_code = EX_IOERR
