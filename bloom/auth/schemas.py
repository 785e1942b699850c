from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class UserBase(BaseSchema):
    email: EmailStr
    name: str


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserOut(UserBase):
    id: UUID
    created_at: Optional[datetime] = None


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class DeleteAccountRequest(BaseModel):
    confirmation: str


class DeleteAccountResponse(BaseModel):
    status: str  # "deleted" | "partial"
    detail: str
    failed_steps: List[str] = []
