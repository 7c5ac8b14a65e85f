"""
Flashdeck Kernel — Action Construction

Factory functions for creating well-formed actions.
Used by the deck coordinator to wrap intents before feeding them to the
reducers, and by tests to build actions concisely.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from flashdeck.kernel.types import Action, Question


def add_question(q: str, a: str, tags: Iterable[str] | None = None) -> Action:
    return Action(type="ADD", payload={"q": q, "a": a, "tags": list(tags) if tags is not None else None})


def remove_question(key: int) -> Action:
    return Action(type="REMOVE", payload=key)


def import_questions(items: Iterable[dict[str, Any]]) -> Action:
    """
    Build an IMPORT from {q, a, tags?} dicts.

    The items replace the whole deck; any `key` in them is ignored.
    """
    payload = [{"q": item["q"], "a": item["a"], "tags": item.get("tags")} for item in items]
    return Action(type="IMPORT", payload=payload)


def start_session(questions: Iterable[Question], tag: str | None = None) -> Action:
    return Action(type="START", payload={"questions": list(questions), "tag": tag})


def next_card() -> Action:
    return Action(type="NEXT")
