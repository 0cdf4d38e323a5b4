#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Base class for localization accessor emitters.

Provides the language-independent half of code generation: walking the
key tree, sanitizing and de-duplicating names, parsing each translation's
format specifiers and inferring its arguments. The result is a
`GroupModel` tree that subclasses render with their own templates.

Subclasses implement `_render` with their templates; the base class handles
traversal, error collection, literal escaping and the shared file banner.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from string import Template
from typing import List, Optional, Set, Tuple

from stringtree.core.arguments import infer_arguments
from stringtree.core.core_types import ArgumentInferenceError, ArgumentType, Group, OutputLanguage
from stringtree.core.naming import NamingContext
from stringtree.emitters.emitter_types import (
    EmitterOptions,
    GenerationError,
    GroupModel,
    LeafModel,
    RenderedSource,
)
from stringtree.parsers.specifier_parser import parse_specifiers

logger = logging.getLogger(__name__)

INDENT = "    "

BANNER = (
    "//\n"
    "// Autogenerated by StringTree\n"
    "// Do not change this file manually!\n"
    "//\n"
)

MARK_TEMPLATE = Template(
    "\n"
    "\n"
    "// --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- ---\n"
    "// MARK: - ${name}\n"
    "\n"
)


def indent_for_level(level: int) -> str:
    """Return the indentation string for a nesting level."""
    return INDENT * level


class BaseEmitter(ABC):
    """Abstract base for accessor code emitters.

    Subclasses must define `LANGUAGE`, `DISPLAY_NAME`, `FILE_EXTENSION` and
    `TYPE_NAMES`, and implement `_render`.

    Attributes:
        options: Emitter configuration.
        naming: Identifier rules for the target language.
    """

    LANGUAGE: OutputLanguage
    DISPLAY_NAME: str = ""
    FILE_EXTENSION: str = ""
    TYPE_NAMES: dict = {}
    CONTROL_ESCAPE_FORMAT: str = "\\u{{{code:x}}}"

    def __init__(self, options: Optional[EmitterOptions] = None) -> None:
        """Initialize the emitter.

        Args:
            options: Generation settings. Defaults to EmitterOptions() for
                this emitter's language.
        """
        self.options = options or EmitterOptions(language=self.LANGUAGE)
        self.naming = NamingContext.for_language(
            self.LANGUAGE, self.options.autocapitalize
        )

    def emit(self, tree: Group) -> RenderedSource:
        """Render accessors for a whole key tree.

        Main entry point. Builds the render model first so that every broken
        translation is reported before anything is rendered.

        Args:
            tree: Root group produced by `core.key_tree.build_tree`.

        Returns:
            The rendered source file(s).

        Raises:
            OptionsError: If the options are invalid.
            GenerationError: If any translation has invalid format arguments.
        """
        self.options.validate()
        failures: List[ArgumentInferenceError] = []
        root = self.build_model(tree, failures)
        if failures:
            raise GenerationError(failures)
        return self._render(root)

    def build_model(
        self,
        tree: Group,
        failures: Optional[List[ArgumentInferenceError]] = None,
    ) -> GroupModel:
        """Convert the key tree into a render model.

        Args:
            tree: Root group.
            failures: Collects inference errors; when None the first error
                is raised instead.

        Returns:
            Root GroupModel named after the base class.
        """
        return self._build_group(tree, self.options.base_class_name, (), failures)

    def _build_group(
        self,
        group: Group,
        name: str,
        path: Tuple[str, ...],
        failures: Optional[List[ArgumentInferenceError]],
    ) -> GroupModel:
        model = GroupModel(name=name, path=path)
        taken: Set[str] = set()

        for segment, leaf in group.leaves():
            leaf_name = self.naming.disambiguate(self.naming.sanitize(segment), taken)
            taken.add(leaf_name)
            try:
                arguments = infer_arguments(parse_specifiers(leaf.value))
            except ArgumentInferenceError as exc:
                exc.attach(leaf.key, leaf.value)
                if failures is None:
                    raise
                logger.debug("Inference failed for '%s': %s", leaf.key, exc.message)
                failures.append(exc)
                continue
            model.leaves.append(LeafModel(leaf_name, leaf.key, leaf.value, arguments))

        for segment, child in group.groups():
            child_name = self.naming.disambiguate(self.naming.sanitize(segment), taken)
            taken.add(child_name)
            model.groups.append(
                self._build_group(child, child_name, path + (child_name,), failures)
            )

        return model

    @abstractmethod
    def _render(self, root: GroupModel) -> RenderedSource:
        """Render the complete output for a render model.

        Args:
            root: Root group model; its name is the base class name.

        Returns:
            The rendered source file(s).
        """
        pass

    def type_name(self, arg_type: ArgumentType) -> str:
        """Spell an argument type in the target language."""
        return self.TYPE_NAMES[arg_type]

    def table_name(self) -> Optional[str]:
        """Return the configured strings table name, if any."""
        return self.options.table_name

    @staticmethod
    def mark(name: str) -> str:
        """Return a ``// MARK: -`` section separator."""
        return MARK_TEMPLATE.substitute(name=name)

    @staticmethod
    def banner() -> str:
        """Return the generated-file banner."""
        return BANNER

    def escape(self, text: str) -> str:
        """Escape text for a C-family double-quoted string literal body."""
        escaped: List[str] = []
        for char in text:
            if char == "\\":
                escaped.append("\\\\")
            elif char == '"':
                escaped.append('\\"')
            elif char == "\n":
                escaped.append("\\n")
            elif char == "\r":
                escaped.append("\\r")
            elif char == "\t":
                escaped.append("\\t")
            elif ord(char) < 0x20 or ord(char) == 0x7F:
                escaped.append(self.CONTROL_ESCAPE_FORMAT.format(code=ord(char)))
            else:
                escaped.append(char)
        return "".join(escaped)
