from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class GoalBase(BaseSchema):
    id: UUID
    user_id: UUID
    title: str
    description: Optional[str] = None
    target_date: Optional[date] = None
    completed: bool = False
    created_at: datetime


class GoalCreate(BaseSchema):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    target_date: Optional[date] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v


class GoalResponse(GoalBase):
    pass
