"""
Flashdeck Kernel — Query Helpers

Read-side helpers over a question list. Nothing here is stored; the tag set
is recomputed from the questions on every call.
"""

from __future__ import annotations

from collections.abc import Iterable

from flashdeck.kernel.types import Question


def all_tags(questions: Iterable[Question]) -> list[str]:
    """Distinct tags across all questions, sorted for stable display."""
    return sorted({tag for question in questions for tag in question.tags})


def filter_by_tag(questions: Iterable[Question], tag: str | None) -> list[Question]:
    """
    Questions carrying `tag` (exact match), or all of them when tag is None.
    Single-tag filtering only.
    """
    if tag is None:
        return list(questions)
    return [question for question in questions if tag in question.tags]
