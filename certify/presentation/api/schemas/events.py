from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EventCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    event_date: date


class EventUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    event_date: Optional[date] = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    event_date: date
    created_by: str
    created_at: datetime
