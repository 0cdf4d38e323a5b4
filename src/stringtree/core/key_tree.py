"""Build a nested namespace tree from delimited localization keys.

``screen.button.title`` becomes ``Group(screen) -> Group(button) ->
Leaf(title)``. Empty segments caused by leading, trailing or doubled
delimiters are dropped, so ``.a.b`` and ``a..b`` land on the same path as
``a.b``. When a key needs a node of the other variant at an occupied path,
the later entry replaces the earlier one in place.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Tuple

from stringtree.core.core_types import Group, Leaf, TreeNode
from stringtree.parsers.parser_types import LocalizationEntry

logger = logging.getLogger(__name__)


def split_key_path(key: str, delimiter: str = ".") -> Tuple[str, ...]:
    """Split a key into its non-empty segments.

    Args:
        key: Localization key.
        delimiter: Segment separator; must not be empty.

    Returns:
        Segments in order; empty when the key holds nothing but delimiters.

    Raises:
        ValueError: If ``delimiter`` is empty.
    """
    if not delimiter:
        raise ValueError("Delimiter must not be empty.")
    return tuple(segment for segment in key.split(delimiter) if segment)


def insert_entry(root: Group, path: Tuple[str, ...], leaf: Leaf) -> None:
    """Insert ``leaf`` at ``path`` below ``root``, creating groups as needed.

    Args:
        root: Tree to modify.
        path: Non-empty key path.
        leaf: Leaf to store at the final segment.
    """
    node = root
    for segment in path[:-1]:
        child = node.children.get(segment)
        if not isinstance(child, Group):
            if child is not None:
                logger.warning(
                    "Key '%s' turns translation '%s' into a group; the translation is dropped",
                    leaf.key,
                    child.key,
                )
            child = Group()
            node.children[segment] = child
        node = child

    last = path[-1]
    existing = node.children.get(last)
    if isinstance(existing, Group):
        logger.warning(
            "Key '%s' replaces a group of %d entries", leaf.key, len(existing)
        )
    node.children[last] = leaf


def build_tree(
    entries: Iterable[LocalizationEntry], delimiter: str = "."
) -> Group:
    """Build the key tree for a whole localization table.

    Args:
        entries: Table rows in input order.
        delimiter: Key segment separator.

    Returns:
        The root group. Children keep first-insertion order.

    Raises:
        ValueError: If ``delimiter`` is empty.
    """
    root = Group()
    for entry in entries:
        path = split_key_path(entry.key, delimiter)
        if not path:
            logger.warning("Skipping key '%s': it has no named segments", entry.key)
            continue
        insert_entry(root, path, Leaf(entry.key, entry.value))
    return root


def iter_leaves(
    group: Group, prefix: Tuple[str, ...] = ()
) -> Iterator[Tuple[Tuple[str, ...], Leaf]]:
    """Yield ``(path, leaf)`` pairs depth-first in child order."""
    for segment, child in group.children.items():
        path = prefix + (segment,)
        if isinstance(child, Leaf):
            yield path, child
        else:
            yield from iter_leaves(child, path)


def count_nodes(node: TreeNode) -> Tuple[int, int]:
    """Return ``(groups, leaves)`` below and including ``node``."""
    if isinstance(node, Leaf):
        return 0, 1
    groups, leaves = 1, 0
    for child in node.children.values():
        child_groups, child_leaves = count_nodes(child)
        groups += child_groups
        leaves += child_leaves
    return groups, leaves


def describe_tree(group: Group, indent: int = 0) -> List[str]:
    """Render an indented outline of the tree, used by verbose logging."""
    lines: List[str] = []
    for segment, child in group.children.items():
        if isinstance(child, Leaf):
            lines.append(f"{'  ' * indent}{segment} = {child.key}")
        else:
            lines.append(f"{'  ' * indent}{segment}/")
            lines.extend(describe_tree(child, indent + 1))
    return lines
