from __future__ import annotations

"""Read ``Name``/``Comment`` from a companion ``.desktop`` file.

Only the ``[Desktop Entry]`` group is looked at; every other group, comment
line and localised key is ignored.
"""

import logging
from dataclasses import dataclass
from typing import IO, Optional

from appdata_toolkit.core.exceptions import MissingCompanionFile

logger = logging.getLogger(__name__)

__all__ = ["DesktopEntry", "read_desktop_entry", "scan_desktop_entry"]

DESKTOP_ENTRY_GROUP = "[Desktop Entry]"
DEFAULT_MAX_LINE = 1024


@dataclass
class DesktopEntry:
    name: Optional[str] = None
    comment: Optional[str] = None


def _iter_lines(fh: IO[str], max_line: int):
    """Yield complete lines shorter than *max_line*, without the newline.

    A line that does not end within the limit is dropped up to its newline.
    A final line without a newline is dropped too.
    """
    limit = max(max_line - 1, 1)
    while True:
        line = fh.readline(limit)
        if not line:
            return
        if not line.endswith("\n"):
            rest = fh.readline()
            while rest and not rest.endswith("\n"):
                rest = fh.readline()
            if not rest:
                return
            continue
        yield line[:-1]


def scan_desktop_entry(fh: IO[str], want_name: bool = True, want_comment: bool = True,
                       max_line: int = DEFAULT_MAX_LINE) -> DesktopEntry:
    """Parse an open desktop file for the wanted keys."""
    entry = DesktopEntry()
    in_entry = False

    for raw in _iter_lines(fh, max_line):
        line = raw.rstrip(" \t\r").lstrip(" \t")
        if not line or line.startswith("#"):
            continue
        if line.startswith("["):
            in_entry = line == DESKTOP_ENTRY_GROUP
            continue
        if not in_entry:
            continue
        key, sep, value = line.partition("=")
        if not sep or not key:
            continue
        key = key.rstrip(" \t")
        value = value.lstrip(" \t")
        if not value:
            continue

        if want_name and key == "Name":
            entry.name = value
            want_name = False
        elif want_comment and key == "Comment":
            entry.comment = value
            want_comment = False
        else:
            continue
        if not want_name and not want_comment:
            break

    return entry


def read_desktop_entry(path: str, want_name: bool = True, want_comment: bool = True,
                       max_line: int = DEFAULT_MAX_LINE) -> DesktopEntry:
    """Open *path* and return its wanted keys.

    Raises:
        MissingCompanionFile: if the file cannot be opened
    """
    try:
        fh = open(path, "r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise MissingCompanionFile(f"Cannot open desktop file: {e.strerror}", path, e)

    with fh:
        entry = scan_desktop_entry(fh, want_name, want_comment, max_line)
    logger.debug("Desktop file %s: name=%r comment=%r", path, entry.name, entry.comment)
    return entry
