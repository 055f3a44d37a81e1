"""Domain models for the certificate service."""

from .account import ROLE_ADMIN, ROLE_USER, ROLES, Account
from .certificate import (
    DELIVERY_DELIVERED,
    DELIVERY_PENDING,
    DELIVERY_SENT,
    DELIVERY_STATUSES,
    Certificate,
)
from .event import Event

__all__ = [
    "Account",
    "Certificate",
    "DELIVERY_DELIVERED",
    "DELIVERY_PENDING",
    "DELIVERY_SENT",
    "DELIVERY_STATUSES",
    "Event",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLES",
]
