from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import List, Optional, Union

from ...domain.errors import NotFound
from ...domain.models import Event
from ...domain.ports.persistence import EventRepository
from .certificate_service import CertificateRegistry

logger = logging.getLogger(__name__)

DateInput = Union[date, str]


class EventCatalog:
    """Administrator-managed events. Removing an event also removes its certificates."""

    def __init__(self, persistence: EventRepository, certificates: CertificateRegistry) -> None:
        self._persistence = persistence
        self._certificates = certificates

    # Public query helpers -------------------------------------------------
    def list(self) -> List[Event]:
        return self._persistence.load_events()

    def get(self, event_id: str) -> Optional[Event]:
        return next((item for item in self._persistence.load_events() if item.id == event_id), None)

    # CRUD operations ------------------------------------------------------
    def create(
        self,
        title: str,
        description: str,
        event_date: Optional[DateInput],
        creator_id: str,
    ) -> Event:
        """
        Create an event and append it to the catalog.

        Raises:
            ValueError: If the title is blank or the date is missing or not an
                ISO date. Nothing is written in that case.
        """
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValueError("Event title is required.")
        parsed_date = self._coerce_date(event_date)

        event = Event(
            id=str(uuid.uuid4()),
            title=clean_title,
            description=description or "",
            event_date=parsed_date,
            created_by=creator_id,
            created_at=datetime.now(timezone.utc),
        )
        events = self._persistence.load_events()
        events.append(event)
        self._persistence.save_events(events)
        logger.info("Event %s (%s) created by %s", event.id, clean_title, creator_id)
        return event

    def update(
        self,
        event_id: str,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        event_date: Optional[DateInput] = None,
    ) -> Event:
        events = self._persistence.load_events()
        for index, event in enumerate(events):
            if event.id == event_id:
                break
        else:
            raise NotFound(f"Event {event_id} not found.")

        updated = event
        if title is not None:
            clean_title = title.strip()
            if not clean_title:
                raise ValueError("Event title cannot be empty.")
            updated = replace(updated, title=clean_title)
        if description is not None:
            updated = replace(updated, description=description)
        if event_date is not None:
            updated = replace(updated, event_date=self._coerce_date(event_date))

        events[index] = updated
        self._persistence.save_events(events)
        logger.info("Event %s updated", event_id)
        return updated

    def delete(self, event_id: str) -> None:
        events = self._persistence.load_events()
        remaining = [item for item in events if item.id != event_id]
        if len(remaining) == len(events):
            return
        self._persistence.save_events(remaining)
        removed = self._certificates.delete_for_event(event_id)
        logger.info("Event %s deleted with %s certificate(s)", event_id, removed)

    # Internal helpers -----------------------------------------------------
    @staticmethod
    def _coerce_date(value: Optional[DateInput]) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        text = (value or "").strip()
        if not text:
            raise ValueError("Event date is required.")
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"Invalid event date: {text}") from exc
