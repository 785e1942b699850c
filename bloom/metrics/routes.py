from datetime import date
from uuid import UUID
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Security
from sqlalchemy.orm import Session

from bloom.auth.service import get_current_user_id
from bloom.core.clock import local_today, resolve_zone
from bloom.core.database import get_db
from bloom.core.events import ChangeFeed, get_change_feed
from bloom.metrics.db import get_metric_for_date, get_user_metrics, upsert_metric
from bloom.metrics.schemas import WellnessMetricBase, WellnessMetricUpsert

router = APIRouter(prefix="/metrics", tags=["Wellness Metrics"])
logger = logging.getLogger(__name__)


@router.get(
    "/today",
    response_model=Optional[WellnessMetricBase],
    summary="Get today's wellness metrics",
    description="Returns the row for the caller's local calendar day, or null if nothing was saved yet.",
    responses={
        200: {"description": "Today's metrics, or null."},
        400: {"description": "Unknown time zone."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to load today's metrics."},
    },
)
def get_today_route(
    tz: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
):
    try:
        today = local_today(resolve_zone(tz))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return get_metric_for_date(db, user_id, today)
    except Exception as e:
        logger.error(f"Error loading today's metrics for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load today's metrics")


@router.get(
    "",
    response_model=List[WellnessMetricBase],
    summary="List wellness metrics",
    description="Daily rows oldest first, optionally from `since` (inclusive).",
    responses={
        200: {"description": "Metrics retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to load wellness metrics."},
    },
)
def list_metrics_route(
    since: Optional[date] = None,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
):
    try:
        return get_user_metrics(db, user_id, since=since)
    except Exception as e:
        logger.error(f"Error loading metrics for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load wellness metrics")


@router.put(
    "/{day}",
    response_model=WellnessMetricBase,
    summary="Save wellness metrics for a day",
    description="""
                Creates or replaces the single metrics row for (user, day). Values outside
                their allowed ranges are rejected.
                """,
    responses={
        200: {"description": "Metrics saved."},
        401: {"description": "Unauthorized."},
        422: {"description": "A value is outside its allowed range."},
        500: {"description": "Failed to save wellness metrics."},
    },
)
def upsert_metrics_route(
    day: date,
    data: WellnessMetricUpsert,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    feed: ChangeFeed = Depends(get_change_feed),
):
    try:
        saved = upsert_metric(db, user_id, day, data)
    except Exception as e:
        logger.error(f"Error saving metrics for user {user_id} on {day}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save wellness metrics")

    feed.publish(user_id, "metrics")
    logger.info(f"Saved wellness metrics for user {user_id} on {day}")
    return saved
