from __future__ import annotations

"""Element states and the transition table that drives the parser.

The table lists, per state, which child elements are recognised, the state
they lead to and whether their character data is captured.  It is built once
at import time and shared read-only by every parse.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

__all__ = [
    "State",
    "Transition",
    "TransitionRow",
    "StateTable",
    "TRANSITION_ROWS",
    "build_state_table",
    "STATE_TABLE",
]


class State(Enum):
    START = "start"
    APPLICATION = "application"
    ID = "id"
    PKGNAME = "pkgname"
    LICENCE = "licence"
    NAME = "name"
    SUMMARY = "summary"
    DESCRIPTION = "description"
    P = "p"
    UL = "ul"
    UL_LI = "ul_li"
    OL = "ol"
    OL_LI = "ol_li"
    URL = "url"
    GROUP = "group"
    KEYWORDS = "keywords"
    KEYWORD = "keyword"
    EXTENDS = "extends"


class TransitionRow(NamedTuple):
    from_state: State
    element: str
    to_state: State
    captures_text: bool


@dataclass(frozen=True)
class Transition:
    to_state: State
    captures_text: bool


# Rows for one source state must stay together.
TRANSITION_ROWS: Tuple[TransitionRow, ...] = (
    TransitionRow(State.START, "applications", State.START, False),
    TransitionRow(State.START, "components", State.START, False),
    TransitionRow(State.START, "application", State.APPLICATION, False),
    TransitionRow(State.START, "component", State.APPLICATION, False),
    TransitionRow(State.APPLICATION, "id", State.ID, True),
    TransitionRow(State.APPLICATION, "pkgname", State.PKGNAME, True),
    TransitionRow(State.APPLICATION, "product_license", State.LICENCE, True),
    TransitionRow(State.APPLICATION, "name", State.NAME, True),
    TransitionRow(State.APPLICATION, "summary", State.SUMMARY, True),
    TransitionRow(State.APPLICATION, "description", State.DESCRIPTION, False),
    TransitionRow(State.APPLICATION, "url", State.URL, True),
    TransitionRow(State.APPLICATION, "project_group", State.GROUP, True),
    TransitionRow(State.APPLICATION, "keywords", State.KEYWORDS, False),
    TransitionRow(State.APPLICATION, "extends", State.EXTENDS, True),
    TransitionRow(State.DESCRIPTION, "p", State.P, True),
    TransitionRow(State.DESCRIPTION, "ul", State.UL, False),
    TransitionRow(State.DESCRIPTION, "ol", State.OL, False),
    TransitionRow(State.UL, "li", State.UL_LI, True),
    TransitionRow(State.OL, "li", State.OL_LI, True),
    TransitionRow(State.KEYWORDS, "keyword", State.KEYWORD, True),
)


class StateTable:
    """Per-state child lookup plus the parent to restore on close."""

    def __init__(self, children: Mapping[State, Mapping[str, Transition]],
                 parents: Mapping[State, State]) -> None:
        self._children = {state: dict(rows) for state, rows in children.items()}
        self._parents = dict(parents)

    def lookup(self, state: State, element: str) -> Optional[Transition]:
        rows = self._children.get(state)
        if rows is None:
            return None
        return rows.get(element)

    def has_children(self, state: State) -> bool:
        return state in self._children

    def parent(self, state: State) -> State:
        return self._parents.get(state, State.START)


def build_state_table(rows: Iterable[TransitionRow]) -> StateTable:
    """Group *rows* by source state.

    Raises ``ValueError`` if the rows of one source state are not contiguous.
    For a repeated (state, element) pair the first row wins.
    """
    children: Dict[State, Dict[str, Transition]] = {}
    parents: Dict[State, State] = {}
    seen_order: List[State] = []

    for row in rows:
        if row.from_state in children and seen_order[-1] is not row.from_state:
            raise ValueError(f"Transition rows for {row.from_state.name} are not contiguous")
        if row.from_state not in children:
            children[row.from_state] = {}
            seen_order.append(row.from_state)
        children[row.from_state].setdefault(row.element, Transition(row.to_state, row.captures_text))
        parents[row.to_state] = row.from_state

    return StateTable(children, parents)


STATE_TABLE = build_state_table(TRANSITION_ROWS)
