from __future__ import annotations

"""Directory importer for AppData/metainfo files.

Parses every ``*.appdata.xml`` and ``*.metainfo.xml`` file of a directory
into one :class:`MetadataStore`.  When asked to, it first looks through the
file lists of the records already in the store to find which packages ship
each AppData file, so the new records can depend on their owners.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from appdata_toolkit.core.exceptions import (
    AppdataError,
    AppdataSyntaxError,
    DirectoryOpenError,
    FileOpenError,
)
from appdata_toolkit.core.models import DirectoryOptions, ParseOptions
from appdata_toolkit.core.parser import AppdataParser
from appdata_toolkit.core.store import MetadataStore
from appdata_toolkit.core.utils import METADATA_SUFFIXES, has_metadata_suffix, prepend_rootdir

logger = logging.getLogger(__name__)

__all__ = ["ScanReport", "build_owner_index", "AppdataDirectoryImporter"]


@dataclass
class ScanReport:
    """Outcome of one directory scan."""

    directory: str
    parsed: List[str] = field(default_factory=list)
    failed: List[AppdataError] = field(default_factory=list)
    handles: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def build_owner_index(store: MetadataStore, directory: str) -> List[Tuple[int, str]]:
    """Return ``(owner handle, AppData basename)`` pairs for *directory*.

    A record owns an AppData file when its file list contains a path that
    sits directly in *directory* and ends in a metadata suffix.
    """
    directory = directory.rstrip("/") or "/"
    index: List[Tuple[int, str]] = []
    for record in store.all_records():
        for path in record.files:
            dirname, _, basename = path.rpartition("/")
            if (dirname or "/") != directory:
                continue
            if has_metadata_suffix(basename):
                index.append((record.handle, basename))
    return index


class AppdataDirectoryImporter:
    """Batch importer for a directory of AppData documents."""

    def __init__(self, store: MetadataStore, parser: Optional[AppdataParser] = None):
        self.store = store
        self.parser = parser or AppdataParser(store)
        self.logger = logging.getLogger(f"{__name__}.AppdataDirectoryImporter")

    def can_import(self, path: Union[str, Path]) -> bool:
        """Check whether *path* names a file this importer would parse."""
        name = os.path.basename(str(path))
        return not name.startswith(".") and has_metadata_suffix(name)

    def import_directory(self, directory: Union[str, Path],
                         options: Optional[DirectoryOptions] = None) -> ScanReport:
        """Parse every AppData document of *directory*.

        Failures of single entries are logged and collected in the returned
        report; they never stop the scan.

        Args:
            directory: Directory to scan (below the root prefix, if any)
            options: Scan options; defaults to :class:`DirectoryOptions()`

        Returns:
            ScanReport listing parsed files, failures and new record handles
        """
        options = options or DirectoryOptions()
        directory = str(directory)
        report = ScanReport(directory=directory)

        owner_index: List[Tuple[int, str]] = []
        if options.use_filelist_index:
            owner_index = build_owner_index(self.store, directory)
            self.logger.debug("Owner index for %s: %d entr(y/ies)", directory, len(owner_index))

        dirpath = prepend_rootdir(options.root_path_prefix, directory)
        try:
            names = sorted(entry.name for entry in os.scandir(dirpath))
        except OSError as e:
            error = DirectoryOpenError(f"Cannot open directory: {e.strerror}", dirpath, e)
            self.logger.error("%s", error)
            report.failed.append(error)
            names = []

        for name in names:
            if not self.can_import(name):
                continue
            path = os.path.join(dirpath, name)
            owners = self._owners_for(owner_index, name) if options.use_filelist_index else []
            try:
                report.handles.extend(self._import_file(path, name, owners, options))
                report.parsed.append(name)
            except FileOpenError as e:
                self.logger.error("%s", e)
                report.failed.append(e)
            except AppdataSyntaxError as e:
                e.file_path = path
                report.failed.append(e)

        if not options.defer_finalize:
            self.store.finalize_batch()

        self.logger.info("Scanned %s: %d parsed, %d failed, %d record(s)",
                         dirpath, len(report.parsed), len(report.failed), len(report.handles))
        return report

    def _import_file(self, path: str, name: str, owners: List[int],
                     options: DirectoryOptions) -> List[int]:
        try:
            fh = open(path, "rb")
        except OSError as e:
            raise FileOpenError(f"Cannot open file: {e.strerror}", path, e)

        parse_options = ParseOptions(
            root_path_prefix=options.root_path_prefix,
            enable_legacy_fallback=True,
            defer_finalize=True,
            source_filename=name,
            owners=owners or None,
        )
        with fh:
            return self.parser.parse(fh, parse_options)

    @staticmethod
    def _owners_for(owner_index: List[Tuple[int, str]], name: str) -> List[int]:
        return [handle for handle, basename in owner_index if basename == name]

    def get_supported_extensions(self) -> List[str]:
        return list(METADATA_SUFFIXES)
