"""
Flashdeck Kernel — the pure engine.

Components:
  shuffle      — Fisher–Yates permutation
  store        — (deck state, action) → deck state  (pure, deterministic)
  session      — (session state, action) → session state
  persistence  — durable slot + export/import documents
  deck         — coordinates reducers + subscribers + IO

Query helpers:
  all_tags, filter_by_tag
"""

from flashdeck.kernel.deck import Deck
from flashdeck.kernel.persistence import (
    FileStorage,
    MalformedImportDocument,
    MalformedPersistedState,
    MemoryStorage,
    PersistenceAdapter,
)
from flashdeck.kernel.queries import all_tags, filter_by_tag
from flashdeck.kernel.session import idle_state, reduce_session
from flashdeck.kernel.shuffle import shuffle
from flashdeck.kernel.store import empty_state, reduce, replay

__all__ = [
    "Deck",
    "FileStorage",
    "MemoryStorage",
    "PersistenceAdapter",
    "MalformedImportDocument",
    "MalformedPersistedState",
    "all_tags",
    "filter_by_tag",
    "empty_state",
    "reduce",
    "replay",
    "idle_state",
    "reduce_session",
    "shuffle",
]
