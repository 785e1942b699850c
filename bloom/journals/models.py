import uuid
from bloom.core.clock import utcnow
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from bloom.core.database import Base


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)

    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True, default=utcnow)

    sentiment_score = Column(Float, nullable=True)  # -1..1
    sentiment_label = Column(String, nullable=True)  # positive, neutral, negative
    ai_feedback = Column(Text, nullable=True)
    mood_intensity = Column(Integer, nullable=True)  # 1..5
