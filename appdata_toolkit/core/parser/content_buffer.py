from __future__ import annotations

"""Text accumulator for the element currently capturing character data."""

from typing import List

from appdata_toolkit.core.utils import indent_lines, normalize_whitespace

__all__ = ["ContentBuffer"]


class ContentBuffer:
    """Growable text buffer.

    Character data arrives in arbitrary slices from the tokenizer, so
    appends are collected as parts and joined lazily on first read.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.value

    @property
    def value(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def clear(self) -> None:
        self._parts = []
        self._length = 0

    def append(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._length += len(text)

    def set(self, text: str) -> None:
        self._parts = [text] if text else []
        self._length = len(text)

    def insert(self, offset: int, text: str) -> None:
        """Insert *text* before position *offset*."""
        if not 0 <= offset <= self._length:
            raise IndexError(f"insert offset {offset} outside buffer of {self._length}")
        current = self.value
        self.set(current[:offset] + text + current[offset:])

    def overwrite(self, offset: int, text: str) -> None:
        """Replace ``len(text)`` characters starting at *offset*."""
        if offset < 0 or offset + len(text) > self._length:
            raise IndexError(f"overwrite of {len(text)} at {offset} outside buffer of {self._length}")
        current = self.value
        self.set(current[:offset] + text + current[offset + len(text):])

    def normalize_whitespace(self) -> None:
        self.set(normalize_whitespace(self.value))

    def indent(self, width: int) -> None:
        self.set(indent_lines(self.value, width))
