from datetime import date
from uuid import UUID, uuid4
from typing import List, Optional

from sqlalchemy.orm import Session
from bloom.core.clock import utcnow
from bloom.metrics.models import WellnessMetric
from bloom.metrics.schemas import WellnessMetricUpsert


def get_metric_for_date(db: Session, user_id: UUID, day: date) -> Optional[WellnessMetric]:
    return db.query(WellnessMetric).filter(
        WellnessMetric.user_id == user_id,
        WellnessMetric.date == day
    ).first()


def get_user_metrics(db: Session, user_id: UUID, since: Optional[date] = None) -> List[WellnessMetric]:
    """
    Retrieves a user's daily metrics, oldest first.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): ID of the user.
        since (Optional[date]): Inclusive lower bound on the metric date.

    Returns:
        List[WellnessMetric]: Matching rows.
    """
    query = db.query(WellnessMetric).filter(WellnessMetric.user_id == user_id)
    if since is not None:
        query = query.filter(WellnessMetric.date >= since)
    return query.order_by(WellnessMetric.date.asc()).all()


def upsert_metric(db: Session, user_id: UUID, day: date, data: WellnessMetricUpsert) -> WellnessMetric:
    """
    Updates the row for (user, day) if it exists, otherwise inserts it.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): ID of the user.
        day (date): Calendar day the metrics belong to.
        data (WellnessMetricUpsert): Metric values.

    Returns:
        WellnessMetric: The stored row.
    """
    existing = get_metric_for_date(db, user_id, day)
    values = data.model_dump()

    if existing:
        for field, value in values.items():
            setattr(existing, field, value)
        existing.updated_at = utcnow()
    else:
        existing = WellnessMetric(id=uuid4(), user_id=user_id, date=day, **values)
        db.add(existing)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(existing)
    return existing


def delete_all_metrics(db: Session, user_id: UUID) -> int:
    """Deletes every metric row owned by the user. ⚠️ Irreversible."""
    try:
        deleted = db.query(WellnessMetric).filter(
            WellnessMetric.user_id == user_id
        ).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return deleted
