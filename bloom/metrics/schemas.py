from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class WellnessMetricBase(BaseSchema):
    id: UUID
    user_id: UUID
    date: date
    sleep_hours: float
    exercise_minutes: int
    water_glasses: int
    energy_level: int
    stress_level: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WellnessMetricUpsert(BaseSchema):
    sleep_hours: float = Field(8, ge=0, le=12)
    exercise_minutes: int = Field(30, ge=0, le=180)
    water_glasses: int = Field(8, ge=0, le=15)
    energy_level: int = Field(7, ge=1, le=10)
    stress_level: int = Field(3, ge=1, le=10)
