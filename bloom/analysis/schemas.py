from typing import Literal

from pydantic import BaseModel, Field

SentimentLabel = Literal["positive", "neutral", "negative"]


class SentimentRequest(BaseModel):
    content: str = Field(..., min_length=1)


class SentimentResponse(BaseModel):
    sentiment_score: float = Field(..., ge=-1, le=1)
    sentiment_label: SentimentLabel
    feedback: str
    fallback: bool = False


class SentimentLLMResponse(BaseModel):
    """Raw model output before clamping and label normalisation."""

    sentiment_score: float = 0.0
    sentiment_label: str = "neutral"
    feedback: str = ""
