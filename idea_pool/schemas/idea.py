"""Idea schemas."""

import uuid
from datetime import UTC, datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

Score = Annotated[int, Field(ge=1, le=10)]


class IdeaCreate(BaseModel):
    """Create or replace an idea."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., min_length=1, max_length=255)
    impact: Score
    ease: Score
    confidence: Score

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("content")
    @classmethod
    def check_printable(cls, value: str) -> str:
        if not value.isprintable():
            raise ValueError("Content must contain printable characters only")
        return value


class IdeaUpdate(IdeaCreate):
    """Replace all editable fields of an idea."""


class IdeaResponse(BaseModel):
    """Idea response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    content: str
    impact: int
    ease: int
    confidence: int
    user_id: int
    average_score: float
    created_at: int  # Unix seconds

    @field_validator("created_at", mode="before")
    @classmethod
    def to_epoch_seconds(cls, value):
        if isinstance(value, datetime):
            if value.tzinfo is None:
                # SQLite drops the offset; stored values are UTC
                value = value.replace(tzinfo=UTC)
            return round(value.timestamp())
        return value
