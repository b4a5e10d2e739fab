from __future__ import annotations

"""Simple reusable helper functions.

These helpers are side-effect-free and contain no disk I/O; they are shared
by the parser, the directory importer and the tests.
"""

import re
from typing import Optional

__all__ = [
    "METADATA_SUFFIXES",
    "normalize_whitespace",
    "indent_lines",
    "has_metadata_suffix",
    "strip_suffix",
    "guess_filename_from_id",
    "prepend_rootdir",
]

METADATA_SUFFIXES = (".appdata.xml", ".metainfo.xml")

_WS_RUN = re.compile(r"[ \t\n]+")
_WS_CHARS = " \t\n"

# id suffix -> replacement used to guess the AppData file name
_ID_SUFFIX_GUESSES = (
    (".desktop", ".appdata.xml"),
    (".ttf", ".metainfo.xml"),
    (".otf", ".metainfo.xml"),
    (".xml", ".metainfo.xml"),
    (".db", ".metainfo.xml"),
)


def _collapse(match: re.Match) -> str:
    return "\n" if "\n" in match.group(0) else " "


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs and strip both ends.

    A run of spaces, tabs and newlines becomes a single newline if it
    contained one, otherwise a single space.  Only those three characters
    count as whitespace.

    Examples:
        >>> normalize_whitespace("  Hello   world\\n\\n")
        'Hello world'
        >>> normalize_whitespace("one \\n  two")
        'one\\ntwo'
    """
    return _WS_RUN.sub(_collapse, text.strip(_WS_CHARS))


def indent_lines(text: str, width: int) -> str:
    """Prefix every non-empty line of *text* with *width* spaces."""
    pad = " " * width
    return "\n".join(pad + line if line else line for line in text.split("\n"))


def has_metadata_suffix(name: str) -> bool:
    """True if *name* ends in ``.appdata.xml`` or ``.metainfo.xml``.

    Matching is case-sensitive and requires a non-empty stem.
    """
    return any(len(name) > len(sfx) and name.endswith(sfx) for sfx in METADATA_SUFFIXES)


def strip_suffix(text: str, suffix: str) -> str:
    if suffix and text.endswith(suffix):
        return text[: -len(suffix)]
    return text


def guess_filename_from_id(component_id: str) -> Optional[str]:
    """Guess the AppData file name from a component id.

    ``foo.desktop`` maps to ``foo.appdata.xml``; font, generic XML and
    database ids map to ``*.metainfo.xml``.  Other ids give no guess.
    """
    for suffix, replacement in _ID_SUFFIX_GUESSES:
        if len(component_id) > len(suffix) and component_id.endswith(suffix):
            return component_id[: -len(suffix)] + replacement
    return None


def prepend_rootdir(root: Optional[str], path: str) -> str:
    """Place absolute *path* below *root* (no-op without a root)."""
    if not root:
        return path
    return root.rstrip("/") + "/" + path.lstrip("/")
