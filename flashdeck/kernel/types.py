"""
Flashdeck Kernel — Shared Types

Data classes used across the store reducer, session reducer, persistence
and the deck coordinator. These are the contracts that bind the kernel together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Action type registry
# ---------------------------------------------------------------------------

STORE_ACTIONS: set[str] = {
    "ADD",
    "REMOVE",
    "IMPORT",
}

SESSION_ACTIONS: set[str] = {
    "START",
    "NEXT",
}


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class Question:
    """
    One flashcard.

    `key` comes from the store's counter, never from list position.
    Identity for display purposes is by key.
    """

    key: int
    q: str
    a: str
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"q": self.q, "a": self.a, "tags": list(self.tags), "key": self.key}


@dataclass
class DeckState:
    """
    The question store's state.

    questions: insertion order is display order
    next_key: counter for the next ADD; only ever grows (IMPORT resets it)
    """

    questions: list[Question] = field(default_factory=list)
    next_key: int = 0

    def to_dict(self) -> dict[str, Any]:
        # "maxKey" is the durable slot's name for the counter
        return {
            "questions": [question.to_dict() for question in self.questions],
            "maxKey": self.next_key,
        }


@dataclass
class SessionState:
    """
    One study run. Never persisted.

    queue: remaining cards, shown front to back
    started: True once any START has been applied
    """

    queue: list[Question] = field(default_factory=list)
    started: bool = False

    @property
    def active(self) -> bool:
        """InProgress when cards remain, Idle otherwise."""
        return len(self.queue) > 0

    @property
    def current(self) -> Question | None:
        return self.queue[0] if self.queue else None


@dataclass
class Action:
    """
    An intent dispatched into one of the reducers.
    Reducers read only `type` and `payload`.
    """

    type: str
    payload: Any = None


@dataclass
class Warning:
    """A non-fatal issue encountered during reduction."""

    code: str
    message: str


@dataclass
class ReduceResult:
    """
    Result of applying one action to a state.
    The reducers never throw — they always return one of these.

    applied is True only when the state actually changed.
    """

    state: Any  # DeckState or SessionState
    applied: bool
    warnings: list[Warning] = field(default_factory=list)
    error: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_tags(tags: Any) -> list[str]:
    """
    Coerce a tags value into a clean list.

    None or a non-sequence → []. Tags are stripped, blanks dropped,
    duplicates removed keeping the first occurrence.
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, (list, tuple)):
        return []

    result: list[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        cleaned = tag.strip()
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return result
