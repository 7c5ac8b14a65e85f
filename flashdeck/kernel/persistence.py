"""
Flashdeck Kernel — Persistence

Sits between the pure store reducer and the outside world. Two concerns:

  durable slot   one named slot holding {questions, maxKey}; rewritten after
                 every committed store change, read once at startup
  export/import  the user-facing {questions: [{q, a, tags}]} document

A corrupt slot never stops startup: it degrades to the empty state.
A bad import document raises MalformedImportDocument so the caller can leave
the store untouched.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from flashdeck.kernel.store import empty_state
from flashdeck.kernel.types import DeckState, Question, normalize_tags
from flashdeck.models.documents import ExportDocument, ExportedQuestion, StoredDeck

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PersistenceError(Exception):
    """Base class for slot and document errors."""
    pass


class MalformedPersistedState(PersistenceError):
    """Slot exists but its content is not a valid deck."""
    pass


class MalformedImportDocument(PersistenceError):
    """Import text is not JSON or lacks a usable questions array."""
    pass


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------

class SlotStorage:
    """
    Abstract key-value slot storage.
    Implement with files for local use, or in-memory for tests.
    """

    def get(self, slot: str) -> str | None:
        """Fetch the slot's text. Returns None if the slot was never written."""
        raise NotImplementedError

    def put(self, slot: str, text: str) -> None:
        """Overwrite the slot with text."""
        raise NotImplementedError

    def delete(self, slot: str) -> None:
        raise NotImplementedError


class MemoryStorage(SlotStorage):
    """In-memory storage for testing."""

    def __init__(self) -> None:
        self.slots: dict[str, str] = {}

    def get(self, slot: str) -> str | None:
        return self.slots.get(slot)

    def put(self, slot: str, text: str) -> None:
        self.slots[slot] = text

    def delete(self, slot: str) -> None:
        self.slots.pop(slot, None)


class FileStorage(SlotStorage):
    """One `<slot>.json` file per slot inside `directory`."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, slot: str) -> Path:
        return self.directory / f"{slot}.json"

    def get(self, slot: str) -> str | None:
        path = self._path(slot)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def put(self, slot: str, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write beside the target then swap, so a crash never leaves half a file
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{slot}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, self._path(slot))
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def delete(self, slot: str) -> None:
        self._path(slot).unlink(missing_ok=True)


# ---------------------------------------------------------------------------
# Durable slot codec
# ---------------------------------------------------------------------------

def serialize_state(state: DeckState) -> str:
    return json.dumps(state.to_dict(), ensure_ascii=False)


def deserialize_state(text: str) -> DeckState:
    """
    Parse slot text into a DeckState.

    Tolerates missing tags and a missing/zero maxKey: the counter is raised
    past every stored key so keys are never handed out twice.

    Raises:
        MalformedPersistedState: text is not JSON or not a deck document
    """
    try:
        stored = StoredDeck.model_validate_json(text)
    except ValidationError as e:
        raise MalformedPersistedState(str(e)) from e

    questions = [
        Question(key=item.key, q=item.q, a=item.a, tags=normalize_tags(item.tags))
        for item in stored.questions
    ]
    next_key = max([stored.max_key, *(question.key + 1 for question in questions)])
    return DeckState(questions=questions, next_key=next_key)


def load_state(storage: SlotStorage, slot: str) -> DeckState:
    """Read the slot at startup. Absent, unreadable or malformed → empty state."""
    try:
        text = storage.get(slot)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("persistence: slot %r unreadable, starting empty: %s", slot, e)
        return empty_state()

    if text is None:
        return empty_state()

    try:
        return deserialize_state(text)
    except MalformedPersistedState as e:
        logger.warning("persistence: slot %r malformed, starting empty: %s", slot, e)
        return empty_state()


class PersistenceAdapter:
    """
    Store subscriber that mirrors every committed state into one slot.

    Fire-and-forget: a failed write is logged and dropped, never retried.
    """

    def __init__(self, storage: SlotStorage, slot: str) -> None:
        self.storage = storage
        self.slot = slot

    def __call__(self, state: DeckState) -> None:
        self.save(state)

    def load(self) -> DeckState:
        return load_state(self.storage, self.slot)

    def save(self, state: DeckState) -> None:
        try:
            self.storage.put(self.slot, serialize_state(state))
        except OSError as e:
            logger.warning("persistence: failed to write slot %r: %s", self.slot, e)


# ---------------------------------------------------------------------------
# Export / import document
# ---------------------------------------------------------------------------

def export_document(questions: list[Question]) -> str:
    """Serialize questions to the user-facing document. Keys are stripped."""
    document = ExportDocument(
        questions=[ExportedQuestion(q=item.q, a=item.a, tags=list(item.tags)) for item in questions],
    )
    return document.model_dump_json(indent=2)


def parse_import_document(text: str | bytes) -> list[dict[str, Any]]:
    """
    Parse an export document into IMPORT payload items.

    Only q, a and tags survive; stored keys and unknown fields are dropped.
    All-or-nothing: any bad entry rejects the whole document.

    Raises:
        MalformedImportDocument: invalid JSON or missing/invalid questions array
    """
    try:
        document = ExportDocument.model_validate_json(text)
    except ValidationError as e:
        raise MalformedImportDocument(str(e)) from e

    return [
        {"q": item.q, "a": item.a, "tags": list(item.tags)}
        for item in document.questions
    ]
