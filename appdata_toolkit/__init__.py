"""Top-level package of the AppData toolkit.

Front-ends (CLI, scripts) should only depend on the public API exposed here
rather than importing internal modules directly.
"""

from .core.models import DirectoryOptions, MetadataRecord, ParseOptions, Relation
from .core.services import AppdataService, parse_directory, parse_document
from .core.store import MetadataStore

__all__: list[str] = [
    "AppdataService",
    "DirectoryOptions",
    "MetadataRecord",
    "MetadataStore",
    "ParseOptions",
    "Relation",
    "parse_directory",
    "parse_document",
]
