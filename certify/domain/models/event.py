from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(slots=True)
class Event:
    id: str
    title: str
    description: str
    event_date: date
    created_by: str
    created_at: datetime
