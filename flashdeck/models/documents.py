"""Boundary models for the JSON documents flashdeck reads and writes."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator


class ExportedQuestion(BaseModel):
    """One entry of the user-facing export/import file. Keys are never part of it."""

    model_config = {"extra": "ignore"}

    q: str
    a: str
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _missing_tags(cls, value):
        return [] if value is None else value


class ExportDocument(BaseModel):
    """What `export` writes and `import` reads."""

    model_config = {"extra": "ignore"}

    questions: list[ExportedQuestion]


class StoredQuestion(ExportedQuestion):
    """One entry of the durable slot. Same as the export entry plus its key."""

    key: int = Field(ge=0)


class StoredDeck(BaseModel):
    """
    The durable slot document.

    maxKey may be missing or zero in older slots; the loader rebuilds the
    counter from the stored keys in that case.
    """

    model_config = {"extra": "ignore", "populate_by_name": True}

    questions: list[StoredQuestion]
    max_key: int = Field(default=0, ge=0, alias="maxKey")

    @field_validator("max_key", mode="before")
    @classmethod
    def _missing_max_key(cls, value):
        return 0 if value is None else value

    @model_validator(mode="after")
    def _unique_keys(self) -> StoredDeck:
        keys = [question.key for question in self.questions]
        if len(keys) != len(set(keys)):
            raise ValueError("duplicate question keys")
        return self
