#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Objective-C emitter: one class per key group, split into .h and .m.

Every group becomes a class named ``_`` followed by the concatenated names
of its path (``_Localizations``, ``_LocalizationsScreen``...). Parents
expose their nested groups as properties returning fresh instances, and the
root class gets a ``sharedInstance`` singleton that the header publishes
through a ``#define`` macro named after the base class.

Classes are emitted children first so that every class is declared before
a parent refers to it.
"""

from __future__ import annotations

import logging
from string import Template
from typing import Dict, List, Set, Tuple

from stringtree.core.core_types import ArgumentType, OutputLanguage
from stringtree.emitters.base_emitter import BaseEmitter, indent_for_level
from stringtree.emitters.emitter_types import GroupModel, LeafModel, RenderedSource

logger = logging.getLogger(__name__)

CLASS_PREFIX = "_"
DEFAULT_SUPERCLASS = "NSObject"

CLASS_HEADER_TEMPLATE = Template(
    "@interface ${class_name} : ${superclass}\n"
    "\n"
    "${content}\n"
    "@end\n"
)

CLASS_IMPLEMENTATION_TEMPLATE = Template(
    "@implementation ${class_name}\n"
    "\n"
    "${content}\n"
    "@end\n"
    "\n"
)

PROPERTY_HEADER_TEMPLATE = Template(
    "/// Base translation: ${comment}\n"
    "- (NSString *)${name};\n"
)

PROPERTY_IMPLEMENTATION_TEMPLATE = Template(
    "/// Base translation: ${comment}\n"
    "- (NSString *)${name} {\n"
    "${indent1}return NSLocalizedStringFromTable(@\"${key}\", ${table}, nil);\n"
    "}\n"
)

METHOD_HEADER_TEMPLATE = Template(
    "/// Base translation: ${comment}\n"
    "- (NSString *(^)(${types}))${name};\n"
)

METHOD_IMPLEMENTATION_TEMPLATE = Template(
    "/// Base translation: ${comment}\n"
    "- (NSString *(^)(${types}))${name} {\n"
    "${indent1}return ^(${params}) {\n"
    "${indent2}return [NSString stringWithFormat: "
    "NSLocalizedStringFromTable(@\"${key}\", ${table}, nil), ${args}];\n"
    "${indent1}};\n"
    "}\n"
)

CHILD_HEADER_TEMPLATE = Template("- (${class_name} *)${name};\n")

CHILD_IMPLEMENTATION_TEMPLATE = Template(
    "- (${class_name} *)${name} {\n"
    "${indent1}return [${class_name} new];\n"
    "}\n"
)

SHARED_INSTANCE_HEADER_TEMPLATE = Template("+ (${class_name} *)sharedInstance;\n")

SHARED_INSTANCE_IMPLEMENTATION_TEMPLATE = Template(
    "+ (${class_name} *)sharedInstance {\n"
    "\n"
    "${indent1}static dispatch_once_t once;\n"
    "${indent1}static ${class_name} *instance;\n"
    "${indent1}dispatch_once(&once, ^{\n"
    "${indent2}instance = [[${class_name} alloc] init];\n"
    "${indent1}});\n"
    "${indent1}return instance;\n"
    "}"
)

MACRO_TEMPLATE = Template(
    "// Make localization to be easily accessible\n"
    "#define ${base_name} [${class_name} sharedInstance]\n"
)


class ObjCEmitter(BaseEmitter):
    """Render accessors as an Objective-C header and implementation pair."""

    LANGUAGE = OutputLanguage.OBJC
    DISPLAY_NAME = "Objective-C"
    FILE_EXTENSION = ".m"
    HEADER_EXTENSION = ".h"
    CONTROL_ESCAPE_FORMAT = "\\{code:03o}"
    TYPE_NAMES = {
        ArgumentType.OBJECT: "NSString *",
        ArgumentType.CHAR: "char",
        ArgumentType.UNICHAR: "unichar",
        ArgumentType.INT: "int",
        ArgumentType.INT8: "signed char",
        ArgumentType.INT16: "short",
        ArgumentType.LONG: "long",
        ArgumentType.INT64: "long long",
        ArgumentType.UINT: "unsigned int",
        ArgumentType.UINT8: "unsigned char",
        ArgumentType.UINT16: "unsigned short",
        ArgumentType.ULONG: "unsigned long",
        ArgumentType.UINT64: "unsigned long long",
        ArgumentType.DOUBLE: "double",
        ArgumentType.POINTER: "void *",
    }

    def _render(self, root: GroupModel) -> RenderedSource:
        class_names = self.class_names(root)

        header = [
            self.banner(),
            self.mark("Imports"),
            self._header_imports(),
            self.mark("Header"),
            self._render_classes(root, class_names, header=True),
            self.mark("Macros"),
            MACRO_TEMPLATE.substitute(
                base_name=root.name, class_name=class_names[root.path]
            ),
        ]
        implementation = [
            self.banner(),
            self.mark("Imports"),
            f'#import "{self.header_filename()}.h"\n',
            self.mark("Header"),
            self._render_classes(root, class_names, header=False),
        ]
        return RenderedSource(
            self.LANGUAGE, "".join(implementation), header="".join(header)
        )

    def class_names(self, root: GroupModel) -> Dict[Tuple[str, ...], str]:
        """Assign a unique class name to every group.

        Concatenating path names can make two different groups collide
        (``ab`` + ``c`` and ``a`` + ``bc``); later groups in depth-first
        order get a numeric suffix.

        Args:
            root: Root group model.

        Returns:
            Mapping of group path to class name.
        """
        names: Dict[Tuple[str, ...], str] = {}
        taken: Set[str] = set()
        for group in root.walk():
            candidate = CLASS_PREFIX + root.name + "".join(group.path)
            name = self.naming.disambiguate(candidate, taken)
            if name != candidate:
                logger.warning(
                    "Class name %s is already used; renamed to %s", candidate, name
                )
            taken.add(name)
            names[group.path] = name
        return names

    def header_filename(self) -> str:
        """Base name of the header imported by the implementation."""
        return self.options.header_filename or self.options.base_class_name

    def superclass(self) -> str:
        return self.options.custom_superclass or DEFAULT_SUPERCLASS

    def _header_imports(self) -> str:
        imports = "@import Foundation;\n"
        if self.options.custom_superclass:
            imports += f'#import "{self.options.custom_superclass}.h"\n'
        return imports

    def _render_classes(
        self,
        group: GroupModel,
        class_names: Dict[Tuple[str, ...], str],
        header: bool,
    ) -> str:
        output: List[str] = [
            self._render_classes(child, class_names, header) for child in group.groups
        ]
        class_name = class_names[group.path]

        content: List[str] = []
        for child in group.groups:
            template = CHILD_HEADER_TEMPLATE if header else CHILD_IMPLEMENTATION_TEMPLATE
            content.append(
                template.substitute(
                    class_name=class_names[child.path],
                    name=child.name,
                    indent1=indent_for_level(1),
                )
            )
        content.extend(self.render_leaf(leaf, header) for leaf in group.leaves)
        if not group.path:
            template = (
                SHARED_INSTANCE_HEADER_TEMPLATE
                if header
                else SHARED_INSTANCE_IMPLEMENTATION_TEMPLATE
            )
            content.append(
                template.substitute(
                    class_name=class_name,
                    indent1=indent_for_level(1),
                    indent2=indent_for_level(2),
                )
            )

        if header:
            output.append(
                CLASS_HEADER_TEMPLATE.substitute(
                    class_name=class_name,
                    superclass=self.superclass(),
                    content="\n".join(content),
                )
            )
        else:
            output.append(
                CLASS_IMPLEMENTATION_TEMPLATE.substitute(
                    class_name=class_name, content="\n".join(content)
                )
            )
        return "\n".join(output)

    def render_leaf(self, leaf: LeafModel, header: bool) -> str:
        """Render one accessor declaration or definition.

        Args:
            leaf: Accessor to render.
            header: Render the ``.h`` declaration instead of the ``.m`` body.

        Returns:
            The rendered method.
        """
        fields = {
            "name": leaf.name,
            "comment": leaf.comment,
            "key": self.escape(leaf.key),
            "table": self._table_argument(),
            "indent1": indent_for_level(1),
            "indent2": indent_for_level(2),
        }
        if not leaf.is_function:
            template = PROPERTY_HEADER_TEMPLATE if header else PROPERTY_IMPLEMENTATION_TEMPLATE
            return template.substitute(fields)

        types = ", ".join(self.type_name(arg.type) for arg in leaf.arguments)
        params = ", ".join(
            f"{self.type_name(arg.type)} {arg.name}" for arg in leaf.arguments
        )
        args = ", ".join(arg.name for arg in leaf.arguments)
        template = METHOD_HEADER_TEMPLATE if header else METHOD_IMPLEMENTATION_TEMPLATE
        return template.substitute(fields, types=types, params=params, args=args)

    def _table_argument(self) -> str:
        table = self.table_name()
        if table is None:
            return "nil"
        return f'@"{self.escape(table)}"'
