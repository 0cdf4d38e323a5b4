#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Write rendered sources to disk or to a stream.

File outputs are first written to temporary siblings and only moved into
place once every file of the run has been staged, so a failed run never
leaves a half-written header/implementation pair behind.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import List, Optional, TextIO, Tuple, Union

from stringtree.emitters.emitter_types import OutputError, RenderedSource
from stringtree.emitters.objc_emitter import ObjCEmitter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def header_path_for(output_path: PathLike) -> Path:
    """Return the ObjC header path that pairs with an implementation path.

    Args:
        output_path: Path of the ``.m`` file (any extension is replaced).

    Returns:
        The same path with a ``.h`` extension.
    """
    return Path(output_path).with_suffix(ObjCEmitter.HEADER_EXTENSION)


def _stage(path: Path, data: bytes) -> str:
    """Write ``data`` to a temporary file next to ``path`` and return its name."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "wb",
        delete=False,
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    ) as handle:
        try:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        except OSError:
            handle.close()
            _discard([handle.name])
            raise
        return handle.name


def _backup(path: Path) -> Optional[str]:
    """Copy an existing ``path`` aside so a failed run can restore it."""
    if not path.exists():
        return None
    handle, name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".bak")
    os.close(handle)
    try:
        shutil.copy2(path, name)
    except OSError:
        _discard([name])
        raise
    return name


def _discard(names: List[Optional[str]]) -> None:
    for name in names:
        if name is None or not os.path.exists(name):
            continue
        try:
            os.unlink(name)
        except OSError:
            logger.debug("Failed to remove temporary file %s", name)


def write_files(files: List[Tuple[Path, str]]) -> List[Path]:
    """Atomically write several files as one unit.

    Every file is staged before any target is touched. Targets replaced
    before a later replacement fails are restored from backups, so a header
    and implementation pair is never left half updated.

    Args:
        files: ``(path, text)`` pairs to write.

    Returns:
        The written paths, in order.

    Raises:
        OutputError: If any file cannot be encoded, staged or moved into
            place.
    """
    paths = [path for path, _ in files]
    details = {"paths": [str(p) for p in paths]}
    try:
        payloads = [text.encode("utf-8") for _, text in files]
    except UnicodeEncodeError as exc:
        raise OutputError(f"Cannot encode output as UTF-8: {exc.reason}", details) from exc

    staged: List[Optional[str]] = []
    backups: List[Optional[str]] = []
    replaced: List[Tuple[Path, Optional[str]]] = []
    try:
        for path, data in zip(paths, payloads):
            staged.append(_stage(path, data))
        for path in paths:
            backups.append(_backup(path) if len(paths) > 1 else None)
        for path, temp_name, backup in zip(paths, staged, backups):
            os.replace(temp_name, path)
            replaced.append((path, backup))
            logger.debug("Wrote %s", path)
    except OSError as exc:
        for path, backup in reversed(replaced):
            _restore(path, backup)
        raise OutputError(f"Cannot write output file: {exc}", details) from exc
    finally:
        _discard(staged)
        _discard(backups)
    return paths


def _restore(path: Path, backup: Optional[str]) -> None:
    try:
        if backup is None:
            os.unlink(path)
        else:
            shutil.copy2(backup, path)
        logger.warning("Restored %s after a failed write", path)
    except OSError:
        logger.error("Could not restore %s after a failed write", path)


def write_atomic(path: PathLike, text: str) -> Path:
    """Atomically write a single text file."""
    return write_files([(Path(path), text)])[0]


def write_rendered(
    rendered: RenderedSource,
    output_path: Optional[PathLike] = None,
    header_path: Optional[PathLike] = None,
    stream: Optional[TextIO] = None,
) -> List[Path]:
    """Write a rendered run to files or to a stream.

    Args:
        rendered: Output of an emitter.
        output_path: Implementation file path; None writes to ``stream``.
        header_path: Header file path; derived from ``output_path`` when
            None. Ignored for sources without a header.
        stream: Destination for stream output; defaults to stdout.

    Returns:
        The paths written, header first; empty for stream output.

    Raises:
        OutputError: If a file or the stream cannot be written.
    """
    if output_path is None:
        stream = stream or sys.stdout
        try:
            if rendered.header is not None:
                stream.write(rendered.header)
            stream.write(rendered.implementation)
            stream.flush()
        except (OSError, UnicodeEncodeError) as exc:
            raise OutputError(f"Cannot write to output stream: {exc}") from exc
        return []

    files: List[Tuple[Path, str]] = []
    if rendered.header is not None:
        files.append((Path(header_path or header_path_for(output_path)), rendered.header))
    files.append((Path(output_path), rendered.implementation))
    return write_files(files)
