#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Swift emitter: a tree of nested structs with static accessors.

Argument-free translations become ``public static var`` properties and
translations with format specifiers become ``public static func``
accessors that format the localized template::

    public struct Localizations {

        /// Base translation: Hello %@
        public static func Greeting(_ value : String) -> String {
            return String(format: NSLocalizedString("Greeting", comment: ""), value)
        }
    }
"""

from __future__ import annotations

from string import Template
from typing import List

from stringtree.core.core_types import ArgumentType, OutputLanguage
from stringtree.emitters.base_emitter import BaseEmitter, indent_for_level
from stringtree.emitters.emitter_types import GroupModel, LeafModel, RenderedSource

STRUCT_TEMPLATE = Template(
    "\n"
    "${indent}public struct ${name} {\n"
    "\n"
    "${content}\n"
    "${indent}}"
)

STATIC_VAR_TEMPLATE = Template(
    "${indent}/// Base translation: ${comment}\n"
    "${indent}public static var ${name} : String = "
    'NSLocalizedString("${key}", ${table}comment: "")\n'
)

FUNC_TEMPLATE = Template(
    "${indent}/// Base translation: ${comment}\n"
    "${indent}public static func ${name}(${params}) -> String {\n"
    "${body_indent}return String(format: "
    'NSLocalizedString("${key}", ${table}comment: ""), ${args})\n'
    "${indent}}\n"
)


class SwiftEmitter(BaseEmitter):
    """Render accessors as nested Swift structs."""

    LANGUAGE = OutputLanguage.SWIFT
    DISPLAY_NAME = "Swift"
    FILE_EXTENSION = ".swift"
    TYPE_NAMES = {
        ArgumentType.OBJECT: "String",
        ArgumentType.CHAR: "CChar",
        ArgumentType.UNICHAR: "unichar",
        ArgumentType.INT: "Int",
        ArgumentType.INT8: "Int8",
        ArgumentType.INT16: "Int16",
        ArgumentType.LONG: "Int",
        ArgumentType.INT64: "Int64",
        ArgumentType.UINT: "UInt",
        ArgumentType.UINT8: "UInt8",
        ArgumentType.UINT16: "UInt16",
        ArgumentType.ULONG: "UInt",
        ArgumentType.UINT64: "UInt64",
        ArgumentType.DOUBLE: "Double",
        ArgumentType.POINTER: "UnsafeRawPointer",
    }

    def _render(self, root: GroupModel) -> RenderedSource:
        parts = [
            self.banner(),
            self.mark("Imports"),
            "import Foundation\n",
            self.mark("Localizations"),
            self.render_group(root, 0),
            "\n",
        ]
        return RenderedSource(self.LANGUAGE, "".join(parts))

    def render_group(self, group: GroupModel, level: int) -> str:
        """Render a struct and, recursively, everything inside it."""
        members: List[str] = [self.render_leaf(leaf, level + 1) for leaf in group.leaves]
        members.extend(self.render_group(child, level + 1) for child in group.groups)
        return STRUCT_TEMPLATE.substitute(
            indent=indent_for_level(level),
            name=group.name,
            content="\n".join(members),
        )

    def render_leaf(self, leaf: LeafModel, level: int) -> str:
        """Render one accessor as a static property or function."""
        fields = {
            "indent": indent_for_level(level),
            "name": leaf.name,
            "key": self.escape(leaf.key),
            "table": self._table_argument(),
            "comment": leaf.comment,
        }
        if not leaf.is_function:
            return STATIC_VAR_TEMPLATE.substitute(fields)

        params = ", ".join(
            f"_ {arg.name} : {self.type_name(arg.type)}" for arg in leaf.arguments
        )
        args = ", ".join(arg.name for arg in leaf.arguments)
        return FUNC_TEMPLATE.substitute(
            fields,
            body_indent=indent_for_level(level + 1),
            params=params,
            args=args,
        )

    def _table_argument(self) -> str:
        table = self.table_name()
        if table is None:
            return ""
        return f'tableName: "{self.escape(table)}", '
