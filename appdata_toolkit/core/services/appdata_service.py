from __future__ import annotations

"""High-level import service for AppData documents.

Entry-point for any front-end (CLI, scripts, tests) that needs to turn
AppData files into metadata records.  Wraps the streaming parser and the
directory importer behind two calls.
"""

import logging
from pathlib import Path
from typing import IO, List, Optional, Union

from appdata_toolkit.core.exceptions import FileOpenError
from appdata_toolkit.core.importers import AppdataDirectoryImporter, ScanReport
from appdata_toolkit.core.models import DirectoryOptions, ParseOptions
from appdata_toolkit.core.parser import AppdataParser
from appdata_toolkit.core.store import MetadataStore

logger = logging.getLogger(__name__)

__all__ = ["AppdataService", "parse_document", "parse_directory"]

Source = Union[str, Path, IO[bytes]]


class AppdataService:
    """Business-logic façade over one :class:`MetadataStore`."""

    def __init__(self, store: Optional[MetadataStore] = None,
                 parser: Optional[AppdataParser] = None) -> None:
        self.store = store if store is not None else MetadataStore()
        self.parser = parser or AppdataParser(self.store)
        self.importer = AppdataDirectoryImporter(self.store, self.parser)
        self.logger = logger

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def parse_document(self, source: Source, options: Optional[ParseOptions] = None) -> List[int]:
        """Parse one document into the store.

        Args:
            source: Path of the document or an open binary stream
            options: Parse options

        Returns:
            Handles of the records created

        Raises:
            FileOpenError: If *source* is a path that cannot be opened
            AppdataSyntaxError: If the document is malformed
        """
        if not isinstance(source, (str, Path)):
            return self.parser.parse(source, options)

        path = Path(source)
        self.logger.debug("Parsing AppData document: %s", path)
        try:
            fh = open(path, "rb")
        except OSError as e:
            raise FileOpenError(f"Cannot open file: {e.strerror}", path, e)
        with fh:
            return self.parser.parse(fh, options)

    def parse_directory(self, directory: Union[str, Path],
                        options: Optional[DirectoryOptions] = None) -> ScanReport:
        """Parse every ``*.appdata.xml``/``*.metainfo.xml`` file of *directory*."""
        return self.importer.import_directory(directory, options)


def parse_document(source: Source, options: Optional[ParseOptions] = None,
                   store: Optional[MetadataStore] = None) -> MetadataStore:
    """Parse *source* into *store* (a new one by default) and return the store."""
    service = AppdataService(store)
    service.parse_document(source, options)
    return service.store


def parse_directory(directory: Union[str, Path], options: Optional[DirectoryOptions] = None,
                    store: Optional[MetadataStore] = None) -> ScanReport:
    """Scan *directory* into *store* (a new one by default)."""
    return AppdataService(store).parse_directory(directory, options)
