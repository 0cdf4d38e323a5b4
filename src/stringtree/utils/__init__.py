"""Shared error types and output helpers.

Provides the exit-code aware base exception used across the generator and
the atomic file writer for rendered sources.
"""

from .errors import EX_DATAERR, EX_IOERR, EX_OK, EX_USAGE, StringTreeError

__all__ = [
    "EX_DATAERR",
    "EX_IOERR",
    "EX_OK",
    "EX_USAGE",
    "StringTreeError",
]
