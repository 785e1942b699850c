from datetime import datetime
from uuid import UUID, uuid4
from typing import List, Optional

from sqlalchemy.orm import Session
from bloom.core.clock import as_utc_naive
from bloom.journals.models import JournalEntry
from bloom.journals.schemas import JournalEntryInsert


def get_entry(db: Session, entry_id: UUID, user_id: UUID) -> Optional[JournalEntry]:
    """
    Retrieves a journal entry by its ID for a given user.

    Args:
        db (Session): SQLAlchemy session.
        entry_id (UUID): ID of the entry.
        user_id (UUID): ID of the owner.

    Returns:
        Optional[JournalEntry]: The entry if found, else None.
    """
    return db.query(JournalEntry).filter(
        JournalEntry.id == entry_id,
        JournalEntry.user_id == user_id
    ).first()


def get_user_entries(
    db: Session,
    user_id: UUID,
    since: Optional[datetime] = None,
    ascending: bool = False,
) -> List[JournalEntry]:
    """
    Retrieves every journal entry of a user, optionally bounded below by creation time.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): ID of the user.
        since (Optional[datetime]): Inclusive lower bound on created_at.
        ascending (bool): Oldest first when True, newest first otherwise.

    Returns:
        List[JournalEntry]: Entries ordered by created_at.
    """
    query = db.query(JournalEntry).filter(JournalEntry.user_id == user_id)
    if since is not None:
        query = query.filter(JournalEntry.created_at >= as_utc_naive(since))
    order = JournalEntry.created_at.asc() if ascending else JournalEntry.created_at.desc()
    return query.order_by(order).all()


def create_entry(db: Session, entry: JournalEntryInsert, user_id: UUID) -> JournalEntry:
    """
    Inserts a new journal entry. Sentiment fields may be null.

    Args:
        db (Session): SQLAlchemy session.
        entry (JournalEntryInsert): Content plus optional sentiment fields.
        user_id (UUID): ID of the owner.

    Returns:
        JournalEntry: The stored entry.
    """
    new_entry = JournalEntry(
        id=uuid4(),
        user_id=user_id,
        content=entry.content,
        sentiment_score=entry.sentiment_score,
        sentiment_label=entry.sentiment_label,
        ai_feedback=entry.ai_feedback,
        mood_intensity=entry.mood_intensity,
    )
    db.add(new_entry)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(new_entry)
    return new_entry


def delete_all_entries(db: Session, user_id: UUID) -> int:
    """
    Deletes every journal entry owned by the user.

    ⚠️ Irreversible operation.

    Returns:
        int: Number of deleted rows.
    """
    try:
        deleted = db.query(JournalEntry).filter(
            JournalEntry.user_id == user_id
        ).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return deleted
