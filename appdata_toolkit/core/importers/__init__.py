from __future__ import annotations

"""Batch import of AppData documents.

Key components:
- AppdataDirectoryImporter: scans a directory and parses every
  ``*.appdata.xml`` / ``*.metainfo.xml`` file it contains
- build_owner_index: maps AppData basenames to the records that ship them
"""

from .appdata_dir import AppdataDirectoryImporter, ScanReport, build_owner_index

__all__ = ["AppdataDirectoryImporter", "ScanReport", "build_owner_index"]
