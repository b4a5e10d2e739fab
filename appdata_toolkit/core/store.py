from __future__ import annotations

"""In-memory package database that receives parsed records.

The parser only talks to the store through the small API below (create a
record, set or append attributes, intern names and relations, add
dependencies, discard on failure, finalize).  Records stay *pending* until
:meth:`MetadataStore.finalize_batch` commits them, which lets a directory
scan share one finalization across many documents.

The store is not thread-safe; callers sharing one between threads must lock
around it.
"""

import logging
from typing import Dict, Iterator, List, Optional

from appdata_toolkit.core.models import Dependency, MetadataRecord, RelFlag, Relation

logger = logging.getLogger(__name__)

__all__ = ["MetadataStore"]

_SCALAR_KEYS = frozenset({"name", "arch", "evr", "category", "summary", "url", "description"})
_ARRAY_KEYS = frozenset({"licenses", "groups", "extends", "keywords", "files"})
_DEPENDENCY_KEYS = frozenset({"requires", "provides"})


class MetadataStore:
    """Owns every :class:`MetadataRecord` and the interned strings they use."""

    def __init__(self) -> None:
        self._records: Dict[int, MetadataRecord] = {}
        self._pending: List[int] = []
        self._strings: Dict[str, str] = {}
        self._relations: Dict[tuple, Relation] = {}
        self._next_handle = 1
        self.finalize_count = 0

    # ------------------------------------------------------------------
    # Record lifecycle
    # ------------------------------------------------------------------
    def add_record(self) -> int:
        """Create an empty pending record and return its handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._records[handle] = MetadataRecord(handle=handle)
        self._pending.append(handle)
        return handle

    def record(self, handle: int) -> MetadataRecord:
        try:
            return self._records[handle]
        except KeyError:
            raise KeyError(f"Unknown record handle: {handle}") from None

    def discard_record(self, handle: int) -> None:
        """Forget a record that was never completed."""
        self._records.pop(handle, None)
        if handle in self._pending:
            self._pending.remove(handle)
        logger.debug("Discarded record %d", handle)

    def finalize_batch(self) -> int:
        """Commit all pending records; return how many were committed."""
        committed = len(self._pending)
        self._pending = []
        self.finalize_count += 1
        logger.debug("Finalized %d pending record(s)", committed)
        return committed

    def is_pending(self, handle: int) -> bool:
        return handle in self._pending

    def records(self) -> List[MetadataRecord]:
        """Committed records in creation order."""
        pending = set(self._pending)
        return [rec for h, rec in sorted(self._records.items()) if h not in pending]

    def all_records(self) -> Iterator[MetadataRecord]:
        """Committed and pending records in creation order."""
        for _, rec in sorted(self._records.items()):
            yield rec

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Interning
    # ------------------------------------------------------------------
    def intern(self, text: str) -> str:
        """Return the canonical copy of *text*."""
        return self._strings.setdefault(text, text)

    def intern_relation(self, name: str, evr: str, flags: RelFlag) -> Relation:
        key = (name, evr, int(flags))
        rel = self._relations.get(key)
        if rel is None:
            rel = Relation(self.intern(name), self.intern(evr), RelFlag(flags))
            self._relations[key] = rel
        return rel

    # ------------------------------------------------------------------
    # Attribute setters
    # ------------------------------------------------------------------
    def set_str(self, handle: int, key: str, value: Optional[str]) -> None:
        """Overwrite scalar attribute *key* of a record."""
        if key not in _SCALAR_KEYS:
            raise ValueError(f"Not a scalar attribute: {key}")
        setattr(self.record(handle), key, None if value is None else self.intern(value))

    def add_str_array(self, handle: int, key: str, value: str) -> None:
        """Append *value* to array attribute *key*, keeping duplicates."""
        if key not in _ARRAY_KEYS:
            raise ValueError(f"Not an array attribute: {key}")
        getattr(self.record(handle), key).append(self.intern(value))

    def add_dependency(self, handle: int, key: str, dep: Dependency) -> None:
        """Add *dep* to the requires/provides set of a record."""
        if key not in _DEPENDENCY_KEYS:
            raise ValueError(f"Not a dependency attribute: {key}")
        deps = getattr(self.record(handle), key)
        if dep not in deps:
            deps.append(dep)
