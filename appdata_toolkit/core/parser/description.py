from __future__ import annotations

"""Plain-text rendering of AppData ``<description>`` markup.

Paragraphs are separated by blank lines, list items are indented by four
columns with a ``-`` bullet or a right-aligned ``N.`` number, and every list
is followed by a blank line::

    First paragraph.

    Features:

      - fast
      - small

     1. download
     2. run
"""

from enum import Enum
from typing import List, Optional

from appdata_toolkit.core.parser.content_buffer import ContentBuffer

__all__ = ["DescriptionFragment", "DescriptionAssembler"]

ITEM_INDENT = 4


class DescriptionFragment(Enum):
    PARAGRAPH = "paragraph"
    UNORDERED_ITEM = "unordered_item"
    ORDERED_ITEM = "ordered_item"
    LIST_END = "list_end"


class DescriptionAssembler:
    """Collects fragments of one description block."""

    def __init__(self) -> None:
        self._parts: Optional[List[str]] = None
        self.item_count = 0

    def reset(self) -> None:
        self._parts = None

    def start_list(self) -> None:
        self.item_count = 0

    @property
    def text(self) -> Optional[str]:
        return None if self._parts is None else "".join(self._parts)

    def add(self, kind: DescriptionFragment, content: Optional[ContentBuffer] = None) -> None:
        """Consume one fragment; *content* is rewritten in place."""
        if kind is DescriptionFragment.LIST_END:
            self._append("\n")
            return
        if content is None:
            raise ValueError(f"{kind.name} fragment needs content")

        content.normalize_whitespace()
        if kind is DescriptionFragment.PARAGRAPH:
            self._append(content.value, "\n\n")
            return

        content.indent(ITEM_INDENT)
        if kind is DescriptionFragment.UNORDERED_ITEM:
            if len(content) >= ITEM_INDENT:
                content.overwrite(2, "-")
        else:
            self.item_count += 1
            if len(content) >= ITEM_INDENT:
                if self.item_count >= 10:
                    content.overwrite(0, str(self.item_count // 10 % 10))
                content.overwrite(1, f"{self.item_count % 10}.")
        self._append(content.value, "\n")

    def finish(self) -> Optional[str]:
        """Return the text without trailing newlines, or None if empty."""
        text = self.text
        if text is None:
            return None
        text = text.rstrip("\n")
        return text or None

    def _append(self, *texts: str) -> None:
        if self._parts is None:
            self._parts = []
        self._parts.extend(texts)
