#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Infer accessor parameters from the format specifiers of one string.

Two numbering schemes are supported and may not be mixed:

* Unnumbered (``%@ %d``): arguments are consumed left to right. A ``*``
  width or precision consumes an extra ``int`` before the value.
* Numbered (``%2$@ %1$d``): every specifier names its argument. A position
  may be referenced several times as long as the types agree, and the
  positions must cover ``1..N`` without gaps.

Each specifier forms a *group*: its value plus any width/precision
arguments. Parameter names are derived from the role an argument plays and
the group(s) it belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from stringtree.core.core_types import (
    ArgumentRole,
    ArgumentType,
    ConflictingTypesError,
    InferredArgument,
    MixedArgumentsError,
    SparsePositionsError,
)
from stringtree.parsers.parser_types import FormatSpecifier, SpecifierKind
from stringtree.parsers.specifier_parser import parse_specifiers

_SIGNED_BY_LENGTH = {
    None: ArgumentType.INT,
    "hh": ArgumentType.INT8,
    "h": ArgumentType.INT16,
    "l": ArgumentType.LONG,
    "z": ArgumentType.LONG,
    "t": ArgumentType.LONG,
    "ll": ArgumentType.INT64,
    "q": ArgumentType.INT64,
    "j": ArgumentType.INT64,
    "L": ArgumentType.INT64,
}

_UNSIGNED_BY_LENGTH = {
    None: ArgumentType.UINT,
    "hh": ArgumentType.UINT8,
    "h": ArgumentType.UINT16,
    "l": ArgumentType.ULONG,
    "z": ArgumentType.ULONG,
    "t": ArgumentType.ULONG,
    "ll": ArgumentType.UINT64,
    "q": ArgumentType.UINT64,
    "j": ArgumentType.UINT64,
    "L": ArgumentType.UINT64,
}

_WIDE_LENGTHS = frozenset(("ll", "q", "j", "L"))

_FIXED_TYPES = {
    SpecifierKind.OBJECT: ArgumentType.OBJECT,
    SpecifierKind.FLOAT: ArgumentType.DOUBLE,
    SpecifierKind.SCIENTIFIC: ArgumentType.DOUBLE,
    SpecifierKind.HEX_FLOAT: ArgumentType.DOUBLE,
    SpecifierKind.CHARACTER: ArgumentType.CHAR,
    SpecifierKind.UNICHAR: ArgumentType.UNICHAR,
    SpecifierKind.POINTER: ArgumentType.POINTER,
}


def argument_type_for(specifier: FormatSpecifier) -> ArgumentType:
    """Map a specifier's conversion and length modifier to an argument type.

    The upper-case ``D``, ``U`` and ``O`` conversions are the legacy long
    forms and read at least a ``long``.

    Args:
        specifier: Parsed specifier.

    Returns:
        The type the matching argument must have.
    """
    fixed = _FIXED_TYPES.get(specifier.kind)
    if fixed is not None:
        return fixed

    length = specifier.length_modifier
    if specifier.conversion in "DUO" and length not in _WIDE_LENGTHS:
        length = "l"
    if specifier.kind is SpecifierKind.SIGNED:
        return _SIGNED_BY_LENGTH[length]
    return _UNSIGNED_BY_LENGTH[length]


@dataclass
class _Slot:
    """Mutable accumulator for one argument while specifiers are scanned."""

    type: ArgumentType
    roles: Set[ArgumentRole] = field(default_factory=set)
    groups: Set[int] = field(default_factory=set)


def _unnumbered_slots(specifiers: Sequence[FormatSpecifier]) -> List[_Slot]:
    slots: List[_Slot] = []
    for group, specifier in enumerate(specifiers, start=1):
        if specifier.is_numbered:
            raise MixedArgumentsError(specifier.text)
        for dimension, role in (
            (specifier.width, ArgumentRole.WIDTH),
            (specifier.precision, ArgumentRole.PRECISION),
        ):
            if not dimension.is_parameterized:
                continue
            if dimension.position is not None:
                raise MixedArgumentsError(specifier.text)
            slots.append(_Slot(ArgumentType.INT, {role}, {group}))
        slots.append(
            _Slot(argument_type_for(specifier), {ArgumentRole.VALUE}, {group})
        )
    return slots


def _merge(
    slots: Dict[int, _Slot],
    position: int,
    arg_type: ArgumentType,
    role: ArgumentRole,
    group: int,
) -> None:
    slot = slots.get(position)
    if slot is None:
        slots[position] = _Slot(arg_type, {role}, {group})
        return
    if slot.type is not arg_type:
        raise ConflictingTypesError(position, slot.type, arg_type)
    slot.roles.add(role)
    slot.groups.add(group)


def _numbered_slots(specifiers: Sequence[FormatSpecifier]) -> List[_Slot]:
    slots: Dict[int, _Slot] = {}
    for specifier in specifiers:
        if not specifier.is_numbered:
            raise MixedArgumentsError(specifier.text)
        value_position = specifier.argument_position
        for dimension, role in (
            (specifier.width, ArgumentRole.WIDTH),
            (specifier.precision, ArgumentRole.PRECISION),
        ):
            if not dimension.is_parameterized:
                continue
            if dimension.position is None:
                raise MixedArgumentsError(specifier.text)
            _merge(slots, dimension.position, ArgumentType.INT, role, value_position)
        _merge(
            slots,
            value_position,
            argument_type_for(specifier),
            ArgumentRole.VALUE,
            value_position,
        )

    highest = max(slots)
    if len(slots) != highest:
        raise SparsePositionsError(
            _first_missing(slots, SparsePositionsError.MAX_LISTED),
            highest - len(slots),
        )
    return [slots[p] for p in range(1, highest + 1)]


def _first_missing(slots: Dict[int, _Slot], limit: int) -> List[int]:
    """Return up to ``limit`` unused positions, walking only the used ones."""
    missing: List[int] = []
    expected = 1
    for position in sorted(slots):
        while expected < position and len(missing) < limit:
            missing.append(expected)
            expected += 1
        if len(missing) >= limit:
            break
        expected = position + 1
    return missing


def _role_name(roles: Set[ArgumentRole]) -> str:
    if ArgumentRole.VALUE in roles:
        return "value"
    if ArgumentRole.WIDTH in roles and ArgumentRole.PRECISION in roles:
        return "options"
    if ArgumentRole.WIDTH in roles:
        return "width"
    return "precision"


def _assign_names(slots: List[_Slot], group_count: int) -> List[str]:
    """Build unique, deterministic parameter names for the slots."""
    names: List[str] = []
    for slot in slots:
        name = _role_name(slot.roles)
        if group_count > 1:
            name += "_".join(str(g) for g in sorted(slot.groups))
        names.append(name)

    duplicated = {n for n in names if names.count(n) > 1}
    if not duplicated:
        return names

    taken: Set[str] = {n for n in names if n not in duplicated}
    unique: List[str] = []
    for position, name in enumerate(names, start=1):
        if name in duplicated:
            candidate = f"{name}_{position}"
            counter = 2
            while candidate in taken:
                candidate = f"{name}_{position}_{counter}"
                counter += 1
            name = candidate
        taken.add(name)
        unique.append(name)
    return unique


def infer_arguments(
    specifiers: Sequence[FormatSpecifier],
) -> List[InferredArgument]:
    """Derive the ordered parameter list for one translation string.

    Args:
        specifiers: Specifiers in source order, as returned by
            `parsers.specifier_parser.parse_specifiers`.

    Returns:
        Arguments in declaration order; empty when there are no specifiers.

    Raises:
        MixedArgumentsError: If numbered and unnumbered forms are combined.
        ConflictingTypesError: If a numbered position is used with two types.
        SparsePositionsError: If numbered positions leave a gap.
    """
    if not specifiers:
        return []

    if specifiers[0].is_numbered:
        slots = _numbered_slots(specifiers)
        group_count = len({s.argument_position for s in specifiers})
    else:
        slots = _unnumbered_slots(specifiers)
        group_count = len(specifiers)

    names = _assign_names(slots, group_count)
    return [
        InferredArgument(
            name=name,
            type=slot.type,
            groups=frozenset(slot.groups),
            position=position,
            roles=frozenset(slot.roles),
        )
        for position, (name, slot) in enumerate(zip(names, slots), start=1)
    ]


def infer_arguments_for_text(text: str) -> List[InferredArgument]:
    """Parse ``text`` and infer its arguments in one step."""
    return infer_arguments(parse_specifiers(text))
