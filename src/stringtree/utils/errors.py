"""Base exception and process exit codes shared by every StringTree module.

Exit codes follow the BSD ``sysexits.h`` convention so shell scripts and
build phases can tell usage mistakes apart from broken input.
"""

from __future__ import annotations

from typing import Any, Optional

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_IOERR = 74


class StringTreeError(Exception):
    """Base class for all errors raised by the generator.

    Attributes:
        message: Human-readable description of the failure.
        details: Optional structured context (key, path, position, ...).
        exit_code: Process exit code the CLI reports for this error.
    """

    exit_code: int = EX_DATAERR

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message
