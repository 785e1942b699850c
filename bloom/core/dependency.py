from functools import lru_cache
import logging

from bloom.analysis.service import SentimentService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _sentiment_service() -> SentimentService:
    return SentimentService.from_config()


def get_sentiment_service() -> SentimentService:
    """
    FastAPI dependency returning the shared sentiment service.
    """
    return _sentiment_service()
