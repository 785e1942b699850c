from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

SentimentLabel = Literal["positive", "neutral", "negative"]


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class JournalEntryBase(BaseSchema):
    id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    sentiment_score: Optional[float] = None
    sentiment_label: Optional[SentimentLabel] = None
    ai_feedback: Optional[str] = None
    mood_intensity: Optional[int] = None


class JournalEntryCreate(BaseSchema):
    content: str = Field(..., min_length=1)
    mood_intensity: Optional[int] = Field(None, ge=1, le=5)
    analyze: bool = True

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v


class JournalEntryInsert(BaseSchema):
    """Row payload for the store: content plus whatever sentiment fields are known."""

    content: str
    sentiment_score: Optional[float] = Field(None, ge=-1, le=1)
    sentiment_label: Optional[SentimentLabel] = None
    ai_feedback: Optional[str] = None
    mood_intensity: Optional[int] = Field(None, ge=1, le=5)


class HighlightFragment(BaseModel):
    text: str
    match: bool


class SearchResponse(BaseModel):
    total: int
    matched: int
    entries: List[JournalEntryBase]
    # Content of each returned entry split around the query, in the same order as `entries`
    highlights: List[List[HighlightFragment]] = []


class JournalEntryCreated(BaseModel):
    entry: JournalEntryBase
    feedback: Optional[str] = None
    sentiment_fallback: bool = False
