from typing import Literal, Optional

from pydantic import BaseModel

ResourceType = Literal["crisis", "support", "emergency"]


class JournalPrompt(BaseModel):
    id: str
    category: str
    prompt: str
    description: str


class SupportResource(BaseModel):
    id: str
    name: str
    description: str
    phone: Optional[str] = None
    website: Optional[str] = None
    availability: str
    type: ResourceType
    country: str


class WellnessTip(BaseModel):
    title: str
    description: str
