"""Pydantic models for flashdeck's persisted and exchanged documents."""

from flashdeck.models.documents import (
    ExportDocument,
    ExportedQuestion,
    StoredDeck,
    StoredQuestion,
)

__all__ = [
    "ExportDocument",
    "ExportedQuestion",
    "StoredDeck",
    "StoredQuestion",
]
