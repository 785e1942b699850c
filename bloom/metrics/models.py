import uuid
from bloom.core.clock import utcnow
from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, UniqueConstraint, Uuid
from bloom.core.database import Base


class WellnessMetric(Base):
    __tablename__ = "wellness_metrics"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_wellness_metrics_user_date"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)
    date = Column(Date, nullable=False)

    sleep_hours = Column(Float, nullable=False, default=8)
    exercise_minutes = Column(Integer, nullable=False, default=30)
    water_glasses = Column(Integer, nullable=False, default=8)
    energy_level = Column(Integer, nullable=False, default=7)  # 1..10
    stress_level = Column(Integer, nullable=False, default=3)  # 1..10

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)
