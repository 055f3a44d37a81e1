"""Certificate domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DELIVERY_PENDING = "pending"
DELIVERY_SENT = "sent"
DELIVERY_DELIVERED = "delivered"
DELIVERY_STATUSES = (DELIVERY_PENDING, DELIVERY_SENT, DELIVERY_DELIVERED)


@dataclass(slots=True)
class Certificate:
    """
    Proof that an account attended an event.

    ``certificate_number`` is the public key used for verification; ``id`` is
    internal. ``event_title`` is copied from the event when the certificate is
    issued so it stays readable after the event is renamed or removed.
    """

    id: str
    event_id: str
    user_id: str
    certificate_number: str
    issued_at: datetime
    verified: bool
    delivery_status: str
    event_title: Optional[str] = None
