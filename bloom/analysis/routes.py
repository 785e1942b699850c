import logging

from fastapi import APIRouter, Depends, Security
from uuid import UUID

from bloom.auth.service import get_current_user_id
from bloom.analysis.schemas import SentimentRequest, SentimentResponse
from bloom.analysis.service import SentimentService
from bloom.core.dependency import get_sentiment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["Analysis"])


@router.post(
    "/sentiment",
    response_model=SentimentResponse,
    summary="Analyze the sentiment of a journal entry",
    description="""
                Score a piece of journal text between -1 and 1, label it positive, neutral or
                negative, and return a short supportive message. When the model cannot be
                reached the response is a neutral default with `fallback` set.
                """,
    responses={
        200: {"description": "Sentiment computed (or neutral fallback)."},
        401: {"description": "Unauthorized."},
    },
)
def analyze_sentiment_route(
    request: SentimentRequest,
    user_id: UUID = Security(get_current_user_id),
    service: SentimentService = Depends(get_sentiment_service),
) -> SentimentResponse:
    logger.info(f"Sentiment analysis requested by user {user_id}")
    return service.analyze(request.content)
