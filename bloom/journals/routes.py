from datetime import datetime
from uuid import UUID
from typing import List, Literal, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Security
from sqlalchemy.orm import Session

from bloom.analysis.service import SentimentService
from bloom.auth.service import get_current_user_id
from bloom.core.clock import local_now, resolve_zone
from bloom.core.database import get_db
from bloom.core.dependency import get_sentiment_service
from bloom.core.events import ChangeFeed, get_change_feed
from bloom.journals.schemas import (
    HighlightFragment,
    JournalEntryBase,
    JournalEntryCreate,
    JournalEntryCreated,
    JournalEntryInsert,
    SearchResponse,
)
from bloom.journals.db import create_entry, get_entry, get_user_entries
from bloom.journals.search import DateRange, SortOrder, date_range_start, highlight, search_entries

router = APIRouter(prefix="/journals", tags=["Journals"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[JournalEntryBase],
    summary="Get journal entries",
    description="Retrieve the authenticated user's journal entries, optionally created after `since`.",
    responses={
        200: {"description": "Journal entries retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to retrieve journal entries."},
    },
)
def get_entries_route(
    since: Optional[datetime] = None,
    order: Literal["asc", "desc"] = "desc",
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[JournalEntryBase]:
    try:
        return get_user_entries(db, user_id, since=since, ascending=(order == "asc"))
    except Exception as e:
        logger.error(f"Error fetching journal entries for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load your journal entries")


@router.post(
    "",
    response_model=JournalEntryCreated,
    status_code=201,
    summary="Write a new journal entry",
    description="""
                Analyze the entry's sentiment and store it. If sentiment analysis is
                unavailable the entry is still saved, without sentiment fields, and a
                generic encouragement is returned instead of tailored feedback.
                """,
    responses={
        201: {"description": "Journal entry saved."},
        401: {"description": "Unauthorized."},
        422: {"description": "Empty content or invalid mood intensity."},
        500: {"description": "Failed to save journal entry."},
    },
)
def create_entry_route(
    entry: JournalEntryCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    sentiment: SentimentService = Depends(get_sentiment_service),
    feed: ChangeFeed = Depends(get_change_feed),
) -> JournalEntryCreated:
    insert = JournalEntryInsert(content=entry.content, mood_intensity=entry.mood_intensity)
    result = None
    if entry.analyze:
        result = sentiment.analyze(entry.content)
        if not result.fallback:
            insert.sentiment_score = result.sentiment_score
            insert.sentiment_label = result.sentiment_label
            insert.ai_feedback = result.feedback

    try:
        saved = create_entry(db, insert, user_id)
    except Exception as e:
        logger.error(f"Error saving journal entry for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save journal entry")

    feed.publish(user_id, "entries")
    return JournalEntryCreated(
        entry=JournalEntryBase.model_validate(saved),
        feedback=result.feedback if result else None,
        sentiment_fallback=bool(result and result.fallback),
    )


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search journal entries",
    description="""
                Case-insensitive search over entry content, AI feedback and mood label,
                combined with an optional mood filter and date range, sorted newest first,
                oldest first or by relevance.
                """,
    responses={
        200: {"description": "Search completed."},
        400: {"description": "Unknown time zone."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to load entries for search."},
    },
)
def search_entries_route(
    q: str = Query("", description="Text to look for."),
    mood: Literal["all", "positive", "neutral", "negative"] = "all",
    date_range: DateRange = "all",
    sort_by: SortOrder = "newest",
    tz: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> SearchResponse:
    try:
        zone = resolve_zone(tz)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        entries = get_user_entries(db, user_id)
    except Exception as e:
        logger.error(f"Error loading entries to search for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load entries for search")

    since = date_range_start(date_range, local_now(zone))
    matched = search_entries(entries, query=q, mood=mood, since=since, sort_by=sort_by)
    return SearchResponse(
        total=len(entries),
        matched=len(matched),
        entries=[JournalEntryBase.model_validate(e) for e in matched],
        highlights=[
            [HighlightFragment(text=text, match=hit) for text, hit in highlight(e.content, q)]
            for e in matched
        ],
    )


@router.get(
    "/{entry_id}",
    response_model=JournalEntryBase,
    summary="Get a journal entry by ID",
    responses={
        200: {"description": "Journal entry retrieved successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Journal entry not found."},
        500: {"description": "Failed to retrieve journal entry."},
    },
)
def read_entry_route(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> JournalEntryBase:
    try:
        entry = get_entry(db, entry_id, user_id)
    except Exception as e:
        logger.error(f"Error retrieving journal entry {entry_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve journal entry")
    if entry is None:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return entry
