from __future__ import annotations

"""Shared data structures used across the AppData toolkit core.

This module is intentionally free of I/O code so that the contained objects
can be reused in any context (unit-tests, CLI, batch import, etc.).
"""

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Dict, List, Optional, Sequence, Union

__all__ = [
    "ARCH_NOARCH",
    "ARCH_SRC",
    "ARCH_NOSRC",
    "EVR_EMPTY",
    "DEFAULT_CATEGORY",
    "APPDATA_PROVIDE_PREFIX",
    "NAME_PREFIX",
    "RelFlag",
    "Relation",
    "Dependency",
    "MetadataRecord",
    "ParseOptions",
    "DirectoryOptions",
]

ARCH_NOARCH = "noarch"
ARCH_SRC = "src"
ARCH_NOSRC = "nosrc"
EVR_EMPTY = ""

DEFAULT_CATEGORY = "desktop"
NAME_PREFIX = "application:"
APPDATA_PROVIDE_PREFIX = "application-appdata("


class RelFlag(IntFlag):
    """Version comparison flags of a :class:`Relation`."""

    GT = 1
    EQ = 2
    LT = 4


_REL_OPERATORS = {
    RelFlag.GT: ">",
    RelFlag.EQ: "=",
    RelFlag.LT: "<",
    RelFlag.GT | RelFlag.EQ: ">=",
    RelFlag.LT | RelFlag.EQ: "<=",
    RelFlag.GT | RelFlag.LT: "<>",
}


@dataclass(frozen=True)
class Relation:
    """A versioned dependency such as ``application:Foo = 1.0``."""

    name: str
    evr: str
    flags: RelFlag

    def __str__(self) -> str:
        op = _REL_OPERATORS.get(self.flags, "?")
        return f"{self.name} {op} {self.evr}"


# A requires/provides entry: a bare interned name or a versioned relation.
Dependency = Union[str, Relation]


@dataclass
class MetadataRecord:
    """One software component parsed from an AppData document.

    Attributes
    ----------
    handle
        Identifier assigned by the owning :class:`MetadataStore`.
    name
        Identity, e.g. ``application:Foo``.
    arch, evr
        Architecture and version; defaulted to :data:`ARCH_NOARCH` and
        :data:`EVR_EMPTY` when the document leaves them unset.
    category
        Component type (``desktop``, ``font``, ``addon``…).
    description
        Plain-text rendering of the ``<description>`` markup.
    files
        File list of the record; used to find the packages owning an
        AppData file during directory scans.
    """

    handle: int
    name: Optional[str] = None
    arch: Optional[str] = None
    evr: Optional[str] = None
    category: Optional[str] = None
    summary: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    licenses: List[str] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)
    extends: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    requires: List[Dependency] = field(default_factory=list)
    provides: List[Dependency] = field(default_factory=list)
    files: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable view of the record."""
        return {
            "name": self.name,
            "arch": self.arch,
            "evr": self.evr,
            "category": self.category,
            "summary": self.summary,
            "url": self.url,
            "description": self.description,
            "licenses": list(self.licenses),
            "groups": list(self.groups),
            "extends": list(self.extends),
            "keywords": list(self.keywords),
            "requires": [str(dep) for dep in self.requires],
            "provides": [str(dep) for dep in self.provides],
        }


@dataclass
class ParseOptions:
    """Options for parsing a single document.

    Attributes
    ----------
    root_path_prefix
        Prepended to the companion desktop-file location.
    enable_legacy_fallback
        Read the companion ``.desktop`` file when name or summary is missing.
    defer_finalize
        Leave records pending in the store; the caller finalizes later.
    source_filename
        Basename of the document, used for the ``application-appdata()``
        link when no package name or owner is known.
    owners
        Handles of the records that install the document.
    """

    root_path_prefix: Optional[str] = None
    enable_legacy_fallback: bool = False
    defer_finalize: bool = False
    source_filename: Optional[str] = None
    owners: Optional[Sequence[int]] = None


@dataclass
class DirectoryOptions:
    """Options for scanning a directory of AppData documents."""

    root_path_prefix: Optional[str] = None
    defer_finalize: bool = False
    use_filelist_index: bool = False
