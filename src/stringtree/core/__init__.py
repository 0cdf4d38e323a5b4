"""Argument inference, key tree construction and identifier naming.

Exports:
    infer_arguments: Turn a specifier list into accessor parameters.
    build_tree: Rebuild the key namespace from a flat table.
    NamingContext: Identifier sanitization rules for one run.
"""

from .arguments import argument_type_for, infer_arguments, infer_arguments_for_text
from .core_types import (
    ArgumentInferenceError,
    ArgumentRole,
    ArgumentType,
    ConflictingTypesError,
    Group,
    InferredArgument,
    Leaf,
    MixedArgumentsError,
    OutputLanguage,
    SparsePositionsError,
    TreeNode,
)
from .key_tree import build_tree, iter_leaves, split_key_path
from .naming import NamingContext

__all__ = [
    "ArgumentInferenceError",
    "ArgumentRole",
    "ArgumentType",
    "ConflictingTypesError",
    "Group",
    "InferredArgument",
    "Leaf",
    "MixedArgumentsError",
    "NamingContext",
    "OutputLanguage",
    "SparsePositionsError",
    "TreeNode",
    "argument_type_for",
    "build_tree",
    "infer_arguments",
    "infer_arguments_for_text",
    "iter_leaves",
    "split_key_path",
]
