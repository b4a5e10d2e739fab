from __future__ import annotations

"""Streaming AppData/AppStream parser.

The document is fed chunk by chunk into an ``lxml`` feed parser whose
*target* is a small state machine.  Only direct children of the current
state are looked up in :data:`STATE_TABLE`; anything else is depth-tracked
and ignored.  Elements carrying ``xml:lang`` are translations of a field
that was already seen, so their whole subtree is skipped.

Each ``<component>``/``<application>`` element becomes one record in the
:class:`MetadataStore`.
"""

import logging
from dataclasses import dataclass, field
from typing import IO, List, Mapping, Optional, Sequence

from lxml import etree as ET

from appdata_toolkit.config import ConfigManager
from appdata_toolkit.core.exceptions import AppdataSyntaxError
from appdata_toolkit.core.models import DEFAULT_CATEGORY, NAME_PREFIX, ParseOptions
from appdata_toolkit.core.parser.content_buffer import ContentBuffer
from appdata_toolkit.core.parser.description import DescriptionAssembler, DescriptionFragment
from appdata_toolkit.core.parser.desktop_entry import DEFAULT_MAX_LINE
from appdata_toolkit.core.parser.relations import (
    DEFAULT_APPLICATIONS_DIR,
    RelationshipSynthesizer,
    add_package_link,
)
from appdata_toolkit.core.parser.states import STATE_TABLE, State, StateTable
from appdata_toolkit.core.store import MetadataStore

logger = logging.getLogger(__name__)

__all__ = ["ParseContext", "AppdataTarget", "AppdataParser"]

XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
DEFAULT_CHUNK_SIZE = 8192

# close action for states that append to a string array
_ARRAY_STATES = {
    State.LICENCE: "licenses",
    State.GROUP: "groups",
    State.EXTENDS: "extends",
    State.KEYWORD: "keywords",
}


def _local_name(tag: str) -> str:
    if tag[:1] == "{":
        return tag.rpartition("}")[2]
    return tag


@dataclass
class ParseContext:
    """Mutable state of one document parse."""

    state: State = State.START
    depth: int = 0
    state_depth: int = 0
    skip_from: Optional[int] = None
    capture: bool = False
    content: ContentBuffer = field(default_factory=ContentBuffer)
    description: DescriptionAssembler = field(default_factory=DescriptionAssembler)
    handle: Optional[int] = None
    desktop_file: Optional[str] = None
    have_summary: bool = False
    source_filename: Optional[str] = None
    owners: Optional[Sequence[int]] = None
    completed: List[int] = field(default_factory=list)

    @property
    def skipping(self) -> bool:
        return self.skip_from is not None


class AppdataTarget:
    """lxml parser target translating SAX-style events into records."""

    def __init__(self, store: MetadataStore, synthesizer: RelationshipSynthesizer,
                 context: Optional[ParseContext] = None,
                 table: StateTable = STATE_TABLE) -> None:
        self.store = store
        self.synthesizer = synthesizer
        self.ctx = context if context is not None else ParseContext()
        self.table = table

    # ------------------------------------------------------------------
    # lxml target interface
    # ------------------------------------------------------------------
    def start(self, tag: str, attrib: Mapping[str, str]) -> None:
        ctx = self.ctx
        if ctx.depth != ctx.state_depth:
            ctx.depth += 1
            return
        ctx.depth += 1

        transition = self.table.lookup(ctx.state, _local_name(tag))
        if transition is None:
            logger.debug("Ignoring <%s> in state %s", tag, ctx.state.name)
            return

        ctx.state = transition.to_state
        ctx.capture = transition.captures_text
        ctx.state_depth = ctx.depth
        ctx.content.clear()

        if not ctx.skipping and XML_LANG in attrib:
            ctx.skip_from = ctx.depth
        if ctx.skipping:
            ctx.capture = False
            return

        self._enter(ctx.state, attrib)

    def end(self, tag: str) -> None:
        ctx = self.ctx
        if ctx.depth != ctx.state_depth:
            ctx.depth -= 1
            return
        ctx.depth -= 1
        ctx.state_depth -= 1

        if ctx.skipping and ctx.depth + 1 >= ctx.skip_from:
            if ctx.depth + 1 == ctx.skip_from:
                ctx.skip_from = None
            ctx.state = self.table.parent(ctx.state)
            ctx.capture = False
            return
        ctx.skip_from = None

        self._leave(ctx.state)
        ctx.state = self.table.parent(ctx.state)
        ctx.capture = False

    def data(self, text: str) -> None:
        if self.ctx.capture:
            self.ctx.content.append(text)

    def close(self) -> List[int]:
        return list(self.ctx.completed)

    # ------------------------------------------------------------------
    # State actions
    # ------------------------------------------------------------------
    def _enter(self, state: State, attrib: Mapping[str, str]) -> None:
        ctx = self.ctx
        if state is State.APPLICATION:
            ctx.handle = self.store.add_record()
            ctx.have_summary = False
            category = attrib.get("type") or DEFAULT_CATEGORY
            self.store.set_str(ctx.handle, "category", category)
        elif state is State.DESCRIPTION:
            ctx.description.reset()
        elif state in (State.UL, State.OL):
            ctx.description.start_list()

    def _leave(self, state: State) -> None:
        ctx = self.ctx
        store = self.store
        handle = ctx.handle
        text = ctx.content.value

        if state is State.APPLICATION:
            self.synthesizer.complete(
                handle,
                desktop_file=ctx.desktop_file,
                have_summary=ctx.have_summary,
                source_filename=ctx.source_filename,
                owners=ctx.owners,
            )
            ctx.completed.append(handle)
            logger.debug("Completed record %d (%s)", handle, store.record(handle).name)
            ctx.handle = None
            ctx.desktop_file = None
        elif state is State.ID:
            ctx.desktop_file = text
        elif state is State.NAME:
            store.set_str(handle, "name", NAME_PREFIX + text)
        elif state is State.SUMMARY:
            if not ctx.have_summary:
                ctx.have_summary = True
                store.set_str(handle, "summary", text)
        elif state is State.URL:
            store.set_str(handle, "url", text)
        elif state in _ARRAY_STATES:
            store.add_str_array(handle, _ARRAY_STATES[state], text)
        elif state is State.PKGNAME:
            add_package_link(store, handle, text)
        elif state is State.DESCRIPTION:
            description = ctx.description.finish()
            if description is not None:
                store.set_str(handle, "description", description)
        elif state is State.P:
            ctx.description.add(DescriptionFragment.PARAGRAPH, ctx.content)
        elif state is State.UL_LI:
            ctx.description.add(DescriptionFragment.UNORDERED_ITEM, ctx.content)
        elif state is State.OL_LI:
            ctx.description.add(DescriptionFragment.ORDERED_ITEM, ctx.content)
        elif state in (State.UL, State.OL):
            ctx.description.add(DescriptionFragment.LIST_END)


class AppdataParser:
    """Parses AppData documents into a :class:`MetadataStore`.

    One instance may parse many documents sequentially; every call to
    :meth:`parse` builds a fresh context and lxml parser.
    """

    def __init__(self, store: MetadataStore, *, chunk_size: Optional[int] = None,
                 applications_dir: Optional[str] = None,
                 max_line: Optional[int] = None) -> None:
        cfg = ConfigManager().get_parser_config()
        self.store = store
        self.chunk_size = int(chunk_size or cfg.get("chunk_size") or DEFAULT_CHUNK_SIZE)
        self.applications_dir = (applications_dir or cfg.get("applications_dir")
                                 or DEFAULT_APPLICATIONS_DIR)
        self.max_line = int(max_line or cfg.get("desktop_entry_max_line") or DEFAULT_MAX_LINE)
        self.logger = logging.getLogger(f"{__name__}.AppdataParser")

    def parse(self, stream: IO[bytes], options: Optional[ParseOptions] = None) -> List[int]:
        """Parse one document from *stream*.

        Args:
            stream: Binary file-like object positioned at the document start
            options: Parse options; defaults to :class:`ParseOptions()`

        Returns:
            Handles of the records completed from this document

        Raises:
            AppdataSyntaxError: If the document is not well-formed XML.  The
                record being built at that point is discarded.
        """
        options = options or ParseOptions()
        synthesizer = RelationshipSynthesizer(
            self.store,
            root_path_prefix=options.root_path_prefix,
            enable_legacy_fallback=options.enable_legacy_fallback,
            applications_dir=self.applications_dir,
            max_line=self.max_line,
        )
        ctx = ParseContext(
            source_filename=options.source_filename,
            owners=list(options.owners) if options.owners else None,
        )
        target = AppdataTarget(self.store, synthesizer, ctx)
        parser = ET.XMLParser(target=target, resolve_entities=False,
                              load_dtd=False, no_network=True)

        try:
            while True:
                chunk = stream.read(self.chunk_size)
                if not chunk:
                    break
                parser.feed(chunk)
            handles = parser.close()
        except ET.XMLSyntaxError as e:
            line, column = e.position
            self.logger.error("repo_appdata: %s at line %d:%d", e.msg, line, column)
            if ctx.handle is not None:
                self.store.discard_record(ctx.handle)
                ctx.handle = None
            if not options.defer_finalize:
                self.store.finalize_batch()
            raise AppdataSyntaxError(e.msg, line, column, options.source_filename, e) from e

        if not options.defer_finalize:
            self.store.finalize_batch()
        self.logger.debug("Parsed %d record(s) from %s", len(handles),
                          options.source_filename or "<stream>")
        return handles
