import logging
from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Security
from fastapi.responses import JSONResponse

from bloom.analytics.schemas import AnalyticsResponse
from bloom.analytics.service import AnalyticsFetchError, AnalyticsTracker
from bloom.auth.service import get_current_user_id
from bloom.core.clock import resolve_zone
from bloom.core.config import ANALYTICS_WINDOW_DAYS
from bloom.core.database import get_session_factory
from bloom.core.events import get_change_feed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@lru_cache(maxsize=None)
def _tracker() -> AnalyticsTracker:
    return AnalyticsTracker(get_session_factory(), get_change_feed())


def get_analytics_tracker() -> AnalyticsTracker:
    return _tracker()


def _zone_or_400(tz: Optional[str]):
    try:
        return resolve_zone(tz)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _stale_response(tracker: AnalyticsTracker, user_id: UUID, days: int, zone, error: AnalyticsFetchError) -> JSONResponse:
    body = AnalyticsResponse(
        stale=True,
        error=f"Could not load your {error.source}; showing your last saved analytics.",
        snapshot=tracker.cached(user_id, window_days=days, tz=zone),
    )
    return JSONResponse(status_code=503, content=body.model_dump(mode="json"))


@router.get(
    "",
    response_model=AnalyticsResponse,
    summary="Get wellness analytics",
    description="""
                Mood trend, weekly activity, mood distribution, wellness score, streak and
                insights over the trailing window. Cached until the user's entries, metrics
                or goals change.
                """,
    responses={
        200: {"description": "Analytics computed."},
        400: {"description": "Unknown time zone."},
        401: {"description": "Unauthorized."},
        503: {"description": "Stores unavailable; last good analytics returned with stale=true."},
    },
)
async def get_analytics_route(
    days: int = Query(ANALYTICS_WINDOW_DAYS, ge=1, le=366, description="Length of the trailing window in days."),
    tz: Optional[str] = Query(None, description="IANA time zone used for calendar days."),
    user_id: UUID = Security(get_current_user_id),
    tracker: AnalyticsTracker = Depends(get_analytics_tracker),
):
    zone = _zone_or_400(tz)
    try:
        snapshot = await tracker.get(user_id, window_days=days, tz=zone)
    except AnalyticsFetchError as e:
        return _stale_response(tracker, user_id, days, zone, e)
    return AnalyticsResponse(snapshot=snapshot)


@router.post(
    "/refresh",
    response_model=AnalyticsResponse,
    summary="Recompute wellness analytics now",
    responses={
        200: {"description": "Analytics recomputed."},
        401: {"description": "Unauthorized."},
        503: {"description": "Stores unavailable; last good analytics returned with stale=true."},
    },
)
async def refresh_analytics_route(
    days: int = Query(ANALYTICS_WINDOW_DAYS, ge=1, le=366),
    tz: Optional[str] = Query(None),
    user_id: UUID = Security(get_current_user_id),
    tracker: AnalyticsTracker = Depends(get_analytics_tracker),
):
    zone = _zone_or_400(tz)
    try:
        snapshot = await tracker.refresh(user_id, window_days=days, tz=zone)
    except AnalyticsFetchError as e:
        return _stale_response(tracker, user_id, days, zone, e)
    return AnalyticsResponse(snapshot=snapshot)
