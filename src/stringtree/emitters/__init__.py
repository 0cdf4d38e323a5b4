"""Code emitters that turn a key tree into Swift or Objective-C accessors.

Exports:
    get_emitter: Create the emitter for an output language.
    emit: Render a key tree with the given options.
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from stringtree.core.core_types import Group, OutputLanguage

from .base_emitter import BaseEmitter
from .emitter_types import (
    DEFAULT_BASE_CLASS_NAME,
    EmitterOptions,
    GenerationError,
    GroupModel,
    LeafModel,
    OptionsError,
    OutputError,
    RenderedSource,
)
from .objc_emitter import ObjCEmitter
from .swift_emitter import SwiftEmitter

EMITTERS: Dict[OutputLanguage, Type[BaseEmitter]] = {
    OutputLanguage.SWIFT: SwiftEmitter,
    OutputLanguage.OBJC: ObjCEmitter,
}


def get_emitter(
    language: OutputLanguage, options: Optional[EmitterOptions] = None
) -> BaseEmitter:
    """Create the emitter registered for ``language``.

    Args:
        language: Target language.
        options: Settings passed to the emitter.

    Returns:
        A ready-to-use emitter instance.
    """
    return EMITTERS[language](options)


def emit(tree: Group, options: EmitterOptions) -> RenderedSource:
    """Render ``tree`` in the language named by ``options``."""
    return get_emitter(options.language, options).emit(tree)


__all__ = [
    "BaseEmitter",
    "DEFAULT_BASE_CLASS_NAME",
    "EMITTERS",
    "EmitterOptions",
    "GenerationError",
    "GroupModel",
    "LeafModel",
    "ObjCEmitter",
    "OptionsError",
    "OutputError",
    "RenderedSource",
    "SwiftEmitter",
    "emit",
    "get_emitter",
]
