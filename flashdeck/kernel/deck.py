"""
Flashdeck Kernel — Deck Coordinator

Sits between the pure reducers and whatever front end drives them.
Owns the committed store state and the current session, turns intents into
actions, and notifies subscribers after each applied store transition.

Operations: add, remove, import, export, start, advance

This is where IO happens (through subscribers and import_file). The reducers
are pure.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import random
from collections.abc import Callable
from pathlib import Path

from flashdeck.kernel import actions
from flashdeck.kernel.persistence import (
    MalformedImportDocument,
    PersistenceAdapter,
    SlotStorage,
    export_document,
    parse_import_document,
)
from flashdeck.kernel.queries import all_tags
from flashdeck.kernel.session import idle_state, reduce_session
from flashdeck.kernel.store import empty_state, reduce
from flashdeck.kernel.types import Action, DeckState, Question, ReduceResult

logger = logging.getLogger(__name__)

Subscriber = Callable[[DeckState], None]


class Deck:
    """
    One question store plus one study session.

    The session holds a value copy of the questions taken at START, so editing
    the deck mid-session does not change the cards being studied.
    """

    def __init__(self, state: DeckState | None = None, rng: random.Random | None = None):
        self._state = state if state is not None else empty_state()
        self._session = idle_state()
        self._subscribers: list[Subscriber] = []
        self._rng = rng

    @classmethod
    def open(cls, storage: SlotStorage, slot: str, rng: random.Random | None = None) -> Deck:
        """Load the deck from a slot and keep the slot in sync from then on."""
        adapter = PersistenceAdapter(storage, slot)
        deck = cls(adapter.load(), rng=rng)
        deck.subscribe(adapter)
        return deck

    # -- subscriptions --

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Call `callback(state)` after every applied store transition.
        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(self, action: Action) -> ReduceResult:
        """Run a store action and notify subscribers if it changed anything."""
        result = reduce(self._state, action)
        if result.error:
            logger.warning("deck: %s", result.error)
        if not result.applied:
            return result

        self._state = result.state
        logger.debug("deck: applied %s, %d questions", action.type, len(self._state.questions))
        for callback in list(self._subscribers):
            callback(self._state)
        return result

    def dispatch_session(self, action: Action) -> ReduceResult:
        result = reduce_session(self._session, action, self._rng)
        if result.applied:
            self._session = result.state
        return result

    # -- store intents --

    def add_question(self, q: str, a: str, tags: list[str] | None = None) -> ReduceResult:
        return self.dispatch(actions.add_question(q, a, tags))

    def remove_question(self, key: int) -> ReduceResult:
        return self.dispatch(actions.remove_question(key))

    def import_raw(self, text: str | bytes) -> bool:
        """
        Replace the deck with the questions in an export document.

        Returns False and leaves the deck untouched if the text is not a
        valid document.
        """
        try:
            items = parse_import_document(text)
        except MalformedImportDocument as e:
            logger.warning("deck: import rejected, deck left unchanged: %s", e)
            return False

        return self.dispatch(actions.import_questions(items)).applied

    async def import_file(self, path: Path | str) -> bool:
        """Read an export document from disk without blocking the loop, then import it."""
        try:
            text = await asyncio.to_thread(Path(path).read_bytes)
        except OSError as e:
            logger.warning("deck: could not read import file %s: %s", path, e)
            return False
        return self.import_raw(text)

    def export_requested(self) -> str:
        """The export document for the current deck, as text."""
        return export_document(self._state.questions)

    # -- session intents --

    def start_session(self, tag: str | None = None) -> ReduceResult:
        return self.dispatch_session(actions.start_session(self._state.questions, tag))

    def advance_session(self) -> ReduceResult:
        return self.dispatch_session(actions.next_card())

    # -- read surface --

    @property
    def state(self) -> DeckState:
        return copy.deepcopy(self._state)

    @property
    def questions(self) -> list[Question]:
        return copy.deepcopy(self._state.questions)

    @property
    def tags(self) -> list[str]:
        return all_tags(self._state.questions)

    @property
    def current_card(self) -> Question | None:
        """Front of the session queue, or None when there are no more cards."""
        card = self._session.current
        return copy.deepcopy(card) if card is not None else None

    @property
    def remaining(self) -> int:
        return len(self._session.queue)

    @property
    def session_active(self) -> bool:
        return self._session.active

    @property
    def session_started(self) -> bool:
        return self._session.started

    @property
    def session_complete(self) -> bool:
        """Started and out of cards: the "deck complete" screen."""
        return self._session.started and not self._session.active
