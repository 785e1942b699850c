import uuid
from bloom.core.clock import utcnow
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String, Text, Uuid
from bloom.core.database import Base


class Goal(Base):
    __tablename__ = "wellness_goals"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    target_date = Column(Date, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
