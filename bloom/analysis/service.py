import logging
from typing import Optional

from pydantic import ValidationError

from bloom.analysis.ai_providers.base import SentimentProvider
from bloom.analysis.prompts.openai_prompts_templates import FALLBACK_FEEDBACK
from bloom.analysis.schemas import SentimentLLMResponse, SentimentResponse

logger = logging.getLogger(__name__)

VALID_LABELS = ("positive", "neutral", "negative")


def neutral_fallback() -> SentimentResponse:
    return SentimentResponse(
        sentiment_score=0.0,
        sentiment_label="neutral",
        feedback=FALLBACK_FEEDBACK,
        fallback=True,
    )


def normalize_sentiment(raw: SentimentLLMResponse) -> SentimentResponse:
    """
    Clamps the score to [-1, 1] and maps unknown labels from the sign of the score.
    """
    score = max(-1.0, min(1.0, float(raw.sentiment_score)))
    label = (raw.sentiment_label or "").strip().lower()
    if label not in VALID_LABELS:
        label = "positive" if score > 0.2 else "negative" if score < -0.2 else "neutral"
    feedback = raw.feedback.strip() or FALLBACK_FEEDBACK
    return SentimentResponse(
        sentiment_score=round(score, 3),
        sentiment_label=label,
        feedback=feedback,
    )


class SentimentService:
    """
    Wraps a provider so that callers always get a usable result.

    Any provider failure (missing configuration, network error, malformed
    JSON) degrades to a neutral result with a generic feedback message.
    """

    def __init__(self, provider: Optional[SentimentProvider] = None):
        self.provider = provider

    @classmethod
    def from_config(cls) -> "SentimentService":
        from bloom.analysis.ai_providers.openai import OpenAISentimentProvider

        try:
            return cls(OpenAISentimentProvider())
        except Exception as e:
            logger.warning(f"Sentiment provider unavailable, using neutral fallback: {e}")
            return cls(None)

    def analyze(self, content: str) -> SentimentResponse:
        if self.provider is None:
            return neutral_fallback()
        try:
            raw = self.provider.analyze_sentiment(content)
            return normalize_sentiment(SentimentLLMResponse.model_validate(raw))
        except (ValidationError, ValueError, TypeError) as e:
            logger.warning(f"Sentiment response could not be parsed: {e}")
        except Exception as e:
            logger.warning(f"Sentiment analysis failed: {e}")
        return neutral_fallback()
