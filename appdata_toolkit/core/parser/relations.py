from __future__ import annotations

"""Requires/provides synthesis run when a component element closes.

Every AppData record gets a link to whatever installs it: an explicit
``<pkgname>``, the owner records found by a directory scan, or the AppData
file name itself.  The link is a ``requires`` on the package/file plus a
``provides`` of ``application-appdata(<package or file>)``.
"""

import logging
from typing import Optional, Sequence

from appdata_toolkit.core.exceptions import MissingCompanionFile
from appdata_toolkit.core.models import (
    APPDATA_PROVIDE_PREFIX,
    ARCH_NOARCH,
    ARCH_NOSRC,
    ARCH_SRC,
    EVR_EMPTY,
    NAME_PREFIX,
    RelFlag,
)
from appdata_toolkit.core.parser.desktop_entry import DEFAULT_MAX_LINE, read_desktop_entry
from appdata_toolkit.core.store import MetadataStore
from appdata_toolkit.core.utils import guess_filename_from_id, prepend_rootdir, strip_suffix

logger = logging.getLogger(__name__)

__all__ = ["appdata_provide", "add_package_link", "RelationshipSynthesizer"]

DEFAULT_APPLICATIONS_DIR = "/usr/share/applications"


def appdata_provide(target: str) -> str:
    return f"{APPDATA_PROVIDE_PREFIX}{target})"


def add_package_link(store: MetadataStore, handle: int, target: str) -> None:
    """Require *target* and provide ``application-appdata(<target>)``."""
    store.add_dependency(handle, "requires", store.intern(target))
    store.add_dependency(handle, "provides", store.intern(appdata_provide(target)))


class RelationshipSynthesizer:
    """Fills defaults, fallback name/summary and dependency links."""

    def __init__(self, store: MetadataStore, *,
                 root_path_prefix: Optional[str] = None,
                 enable_legacy_fallback: bool = False,
                 applications_dir: str = DEFAULT_APPLICATIONS_DIR,
                 max_line: int = DEFAULT_MAX_LINE) -> None:
        self.store = store
        self.root_path_prefix = root_path_prefix
        self.enable_legacy_fallback = enable_legacy_fallback
        self.applications_dir = applications_dir
        self.max_line = max_line

    def desktop_file_path(self, desktop_file: str) -> str:
        path = f"{self.applications_dir.rstrip('/')}/{desktop_file}"
        return prepend_rootdir(self.root_path_prefix, path)

    def complete(self, handle: int, *, desktop_file: Optional[str], have_summary: bool,
                 source_filename: Optional[str] = None,
                 owners: Optional[Sequence[int]] = None) -> None:
        store = self.store
        record = store.record(handle)

        if record.arch is None:
            store.set_str(handle, "arch", ARCH_NOARCH)
        if record.evr is None:
            store.set_str(handle, "evr", EVR_EMPTY)

        if (self.enable_legacy_fallback and desktop_file
                and (record.name is None or not have_summary)):
            self._fill_from_desktop_file(handle, desktop_file, have_summary)

        if record.name is None and desktop_file:
            name = strip_suffix(NAME_PREFIX + desktop_file, ".desktop")
            store.set_str(handle, "name", name)

        if not record.requires and owners:
            for owner in owners:
                owner_name = store.record(owner).name
                if owner_name is None:
                    logger.warning("Owner record %d of %s has no name; skipped", owner, record.name)
                    continue
                add_package_link(store, handle, owner_name)

        if not record.requires and (desktop_file or source_filename):
            filename = source_filename
            if not filename:
                filename = guess_filename_from_id(desktop_file)
            if filename:
                add_package_link(store, handle, filename)

        if record.name is not None and record.arch not in (ARCH_SRC, ARCH_NOSRC):
            rel = store.intern_relation(record.name, record.evr, RelFlag.EQ)
            store.add_dependency(handle, "provides", rel)

    def _fill_from_desktop_file(self, handle: int, desktop_file: str, have_summary: bool) -> None:
        record = self.store.record(handle)
        path = self.desktop_file_path(desktop_file)
        try:
            entry = read_desktop_entry(path, want_name=record.name is None,
                                       want_comment=not have_summary, max_line=self.max_line)
        except MissingCompanionFile:
            return

        if entry.name is not None:
            self.store.set_str(handle, "name", NAME_PREFIX + entry.name)
        if entry.comment is not None:
            self.store.set_str(handle, "summary", entry.comment)
