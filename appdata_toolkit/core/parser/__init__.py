from __future__ import annotations

"""AppData document parser.

Provides the streaming state-machine parser and the pieces it is built from
(content buffer, transition table, description assembler, desktop-file
fallback and relationship synthesis).
"""

from .appdata_parser import AppdataParser, AppdataTarget, ParseContext  # noqa: F401
from .description import DescriptionAssembler, DescriptionFragment  # noqa: F401
from .states import STATE_TABLE, State  # noqa: F401

__all__: list[str] = [
    "AppdataParser",
    "AppdataTarget",
    "ParseContext",
    "DescriptionAssembler",
    "DescriptionFragment",
    "STATE_TABLE",
    "State",
]
