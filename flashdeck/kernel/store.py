"""
Flashdeck Kernel — Question Store Reducer

Pure function: (state, action) → ReduceResult
No side effects. No IO. Deterministic.

Persistence is not done here; the deck coordinator notifies its subscribers
after every applied transition.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable

from flashdeck.kernel.types import (
    Action,
    DeckState,
    Question,
    ReduceResult,
    STORE_ACTIONS,
    Warning,
    normalize_tags,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_state() -> DeckState:
    """The store state when nothing has been persisted yet."""
    return DeckState(questions=[], next_key=0)


def reduce(state: DeckState, action: Action) -> ReduceResult:
    """
    Apply one action to the store state.

    The input state is never modified. Unknown actions leave the state
    unchanged and report UNKNOWN_ACTION instead of raising.
    """
    action_type = getattr(action, "type", None)
    if not isinstance(action_type, str) or action_type not in STORE_ACTIONS:
        return ReduceResult(
            state=state,
            applied=False,
            error=f"UNKNOWN_ACTION: {getattr(action, 'type', action)!r}",
        )

    return _HANDLERS[action_type](copy.deepcopy(state), action.payload)


def replay(actions: Iterable[Action]) -> DeckState:
    """
    Rebuild store state from scratch by reducing over all actions.
    replay(actions) == reduce(reduce(reduce(empty(), a1), a2), a3)...
    """
    state = empty_state()
    for action in actions:
        state = reduce(state, action).state
    return state


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(state: DeckState, code: str, msg: str) -> ReduceResult:
    return ReduceResult(state=state, applied=False, error=f"{code}: {msg}")


def _ok(state: DeckState) -> ReduceResult:
    return ReduceResult(state=state, applied=True)


def _make_question(key: int, item: dict) -> Question:
    return Question(
        key=key,
        q=item.get("q", ""),
        a=item.get("a", ""),
        tags=normalize_tags(item.get("tags")),
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_add(state: DeckState, payload) -> ReduceResult:
    if not isinstance(payload, dict):
        return _reject(state, "INVALID_PAYLOAD", "ADD expects an object with q and a")

    state.questions.append(_make_question(state.next_key, payload))
    state.next_key += 1
    return _ok(state)


def _handle_remove(state: DeckState, payload) -> ReduceResult:
    remaining = [question for question in state.questions if question.key != payload]
    if len(remaining) == len(state.questions):
        return ReduceResult(
            state=state,
            applied=False,
            warnings=[Warning(code="NOT_FOUND", message=f"No question with key {payload!r}")],
        )

    # next_key is untouched: deleted keys are never handed out again
    state.questions = remaining
    return _ok(state)


def _handle_import(state: DeckState, payload) -> ReduceResult:
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        return _reject(state, "INVALID_PAYLOAD", "IMPORT expects a list of objects")

    # Full replace, re-keyed 0..n-1 in payload order
    state.questions = [_make_question(i, item) for i, item in enumerate(payload)]
    state.next_key = len(payload)
    return _ok(state)


_HANDLERS = {
    "ADD": _handle_add,
    "REMOVE": _handle_remove,
    "IMPORT": _handle_import,
}
