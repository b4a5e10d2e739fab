from __future__ import annotations

"""High-level orchestration services."""

from .appdata_service import AppdataService, parse_directory, parse_document  # noqa: F401

__all__: list[str] = [
    "AppdataService",
    "parse_document",
    "parse_directory",
]
