"""
Flashdeck Kernel — Session Engine Reducer

(state, action) → ReduceResult for one study run.

States:
  Idle        queue empty (never started, or exhausted)
  InProgress  queue non-empty; the front card is the one on display

START always discards the previous queue. NEXT drops the front card whether
or not its answer was shown; flipping a card is a display concern only.
"""

from __future__ import annotations

import copy
import random

from flashdeck.kernel.queries import filter_by_tag
from flashdeck.kernel.shuffle import shuffle
from flashdeck.kernel.types import SESSION_ACTIONS, Action, ReduceResult, SessionState, Warning


def idle_state() -> SessionState:
    return SessionState(queue=[], started=False)


def reduce_session(
    state: SessionState,
    action: Action,
    rng: random.Random | None = None,
) -> ReduceResult:
    """
    Apply one action to the session state. Never raises.

    `rng` makes the START shuffle reproducible; omit it for normal play.
    """
    action_type = getattr(action, "type", None)
    if not isinstance(action_type, str) or action_type not in SESSION_ACTIONS:
        return ReduceResult(
            state=state,
            applied=False,
            error=f"UNKNOWN_ACTION: {action_type if action_type is not None else action!r}",
        )

    if action_type == "START":
        return _start(action.payload, rng)
    return _next(state)


def _start(payload, rng: random.Random | None) -> ReduceResult:
    if not isinstance(payload, dict):
        payload = {}

    tag = payload.get("tag")
    # Value copy: later edits to the store must not leak into a running session
    candidates = copy.deepcopy(filter_by_tag(payload.get("questions") or [], tag))
    queue = list(shuffle(candidates, rng))

    warnings = []
    if not queue:
        warnings.append(Warning(
            code="EMPTY_DECK",
            message="No questions to study" + (f" for tag {tag!r}" if tag is not None else ""),
        ))
    return ReduceResult(state=SessionState(queue=queue, started=True), applied=True, warnings=warnings)


def _next(state: SessionState) -> ReduceResult:
    if not state.queue:
        return ReduceResult(
            state=state,
            applied=False,
            warnings=[Warning(code="EMPTY_QUEUE", message="No card to advance past")],
        )

    return ReduceResult(
        state=SessionState(queue=list(state.queue[1:]), started=state.started),
        applied=True,
    )
