#!/usr/bin/env python3
"""End-to-end generation pipeline: load, build, emit, write.

Ties the parsers, the key tree and the emitters together for one input
table. Used by the CLI and usable directly from build scripts.

Usage::

    from stringtree.core.generator import GenerationRequest, generate

    result = generate(GenerationRequest(Path("Localizable.strings"), Path("Strings.swift")))
    for line in result.logs:
        print(line)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, TextIO

from stringtree.core.core_types import OutputLanguage
from stringtree.core.key_tree import build_tree, count_nodes, describe_tree
from stringtree.emitters import get_emitter
from stringtree.emitters.emitter_types import EmitterOptions
from stringtree.parsers.strings_parser import load_strings_table
from stringtree.utils.output_writer import header_path_for, write_rendered

logger = logging.getLogger(__name__)


@dataclass
class GenerationRequest:
    """Everything needed for one generation run.

    Attributes:
        input_path: Localization table to read.
        output_path: Implementation file to write; None for stdout.
        options: Emitter settings.
        delimiter: Key segment separator.
    """

    input_path: Path
    output_path: Optional[Path] = None
    options: EmitterOptions = field(default_factory=EmitterOptions)
    delimiter: str = "."

    @property
    def header_path(self) -> Optional[Path]:
        """ObjC header path paired with the output path, if any."""
        if self.output_path is None or self.options.language is not OutputLanguage.OBJC:
            return None
        return header_path_for(self.output_path)

    def resolved_options(self) -> EmitterOptions:
        """Return the options with the ObjC header name filled in.

        The implementation imports the header by the output file's stem, or
        by the base class name when writing to stdout.
        """
        if self.options.header_filename or self.output_path is None:
            return self.options
        return dataclasses.replace(
            self.options, header_filename=Path(self.output_path).stem
        )


@dataclass
class GenerationResult:
    """Outcome of a successful generation run.

    Attributes:
        name: Short identifier for the run (the target language).
        logs: Informational messages produced during the run.
        written: Files written, header first; empty for stdout output.
        details: Counts of entries, groups and accessors.
    """

    name: str
    logs: List[str] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    details: Dict[str, int] = field(default_factory=dict)

    def add_log(self, message: str) -> None:
        """Append an informational message to the logs.

        Args:
            message: Log message to record.
        """
        self.logs.append(message)


def generate(request: GenerationRequest, stream: Optional[TextIO] = None) -> GenerationResult:
    """Run the whole pipeline for one request.

    Nothing is written unless every entry renders successfully.

    Args:
        request: What to read, how to render it and where to write it.
        stream: Destination for stdout output; defaults to ``sys.stdout``.

    Returns:
        GenerationResult with logs and written paths.

    Raises:
        InputError: If the table cannot be read or parsed.
        OptionsError: If the emitter options are invalid.
        GenerationError: If any translation has invalid format arguments.
        OutputError: If the output cannot be written.
        ValueError: If the delimiter is empty.
    """
    options = request.resolved_options()
    result = GenerationResult(name=options.language.value)

    entries = load_strings_table(request.input_path)
    result.add_log(f"Loaded {len(entries)} entries from {request.input_path}")

    tree = build_tree(entries, request.delimiter)
    groups, leaves = count_nodes(tree)
    result.details.update(entries=len(entries), groups=groups, accessors=leaves)
    result.add_log(f"Built key tree with {groups} groups and {leaves} accessors")
    if logger.isEnabledFor(logging.DEBUG):
        for line in describe_tree(tree):
            logger.debug("  %s", line)

    emitter = get_emitter(options.language, options)
    output_path = request.output_path
    if output_path is not None and Path(output_path).suffix != emitter.FILE_EXTENSION:
        logger.warning(
            "Output %s does not use the %s extension %s",
            output_path,
            emitter.DISPLAY_NAME,
            emitter.FILE_EXTENSION,
        )
    rendered = emitter.emit(tree)
    result.add_log(f"Rendered {leaves} accessors as {emitter.DISPLAY_NAME}")
    result.written = write_rendered(
        rendered, request.output_path, request.header_path, stream
    )
    for path in result.written:
        result.add_log(f"Wrote {path}")
    return result
