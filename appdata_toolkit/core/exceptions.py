from __future__ import annotations

"""Exception classes raised while importing AppData documents.

Single-document parsing raises these to the caller.  Directory scans catch
them per entry, log them and keep going, so one bad file never aborts a
batch.
"""

from pathlib import Path
from typing import Optional, Union

__all__ = [
    "AppdataError",
    "AppdataSyntaxError",
    "MissingCompanionFile",
    "FileOpenError",
    "DirectoryOpenError",
]

PathLike = Union[str, Path]


class AppdataError(Exception):
    """Base exception for all AppData import errors."""

    def __init__(self, message: str, file_path: Optional[PathLike] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.file_path = str(file_path) if file_path is not None else None
        self.cause = cause

    def __str__(self) -> str:
        if self.file_path:
            return f"{self.file_path}: {self.message}"
        return self.message


class AppdataSyntaxError(AppdataError):
    """Raised when the XML tokenizer rejects a document.

    Carries the line and column reported by the tokenizer.  The record that
    was being built when the error occurred has already been discarded.
    """

    def __init__(self, message: str, line: int = 0, column: int = 0,
                 file_path: Optional[PathLike] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, file_path, cause)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{super().__str__()} at line {self.line}:{self.column}"


class MissingCompanionFile(AppdataError):
    """Raised when the companion ``.desktop`` file cannot be read.

    Expected for most components; callers swallow it.
    """


class FileOpenError(AppdataError):
    """Raised when a document cannot be opened."""


class DirectoryOpenError(AppdataError):
    """Raised when a directory cannot be listed."""
