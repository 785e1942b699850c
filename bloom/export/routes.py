from uuid import UUID
from typing import Literal, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Security
from fastapi.responses import Response
from sqlalchemy.orm import Session

from bloom.auth.service import get_current_user_id
from bloom.core.clock import local_now, resolve_zone
from bloom.core.database import get_db
from bloom.export.service import MEDIA_TYPES, ExportFormat, export_filename, render_export
from bloom.goals.db import get_user_goals
from bloom.journals.db import get_user_entries
from bloom.journals.search import date_range_start
from bloom.metrics.db import get_user_metrics

router = APIRouter(prefix="/export", tags=["Export"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    summary="Download the journal",
    description="""
                Returns the user's entries for the chosen period as an attachment.
                `html` is a printable page, `csv` opens in spreadsheets and `json`
                carries metadata. With `include_wellness`, the JSON export also lists
                daily metrics and goals.
                """,
    responses={
        200: {"description": "Export file."},
        400: {"description": "Unknown time zone."},
        401: {"description": "Unauthorized."},
        404: {"description": "No entries in the selected period."},
        500: {"description": "Failed to export journal."},
    },
)
def export_route(
    format: ExportFormat = Query("html", description="html, csv or json."),
    date_range: Literal["all", "week", "month", "year"] = "all",
    tz: Optional[str] = None,
    include_wellness: bool = False,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> Response:
    try:
        zone = resolve_zone(tz)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    now = local_now(zone)
    since = date_range_start(date_range, now)

    try:
        entries = get_user_entries(db, user_id, since=since)
        metrics = goals = None
        if include_wellness and format == "json":
            metrics = get_user_metrics(db, user_id, since=since.date() if since else None)
            goals = get_user_goals(db, user_id)
    except Exception as e:
        logger.error(f"Error loading data to export for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to export journal")

    if not entries:
        raise HTTPException(
            status_code=404,
            detail=f"No entries found for the selected time period ({date_range}).",
        )

    body = render_export(format, entries, date_range, zone, metrics=metrics, goals=goals)
    filename = export_filename(format, date_range, now.date())
    logger.info(f"Exported {len(entries)} entries as {format} for user {user_id}")
    return Response(
        content=body,
        media_type=MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
