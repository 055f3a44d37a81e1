"""Account domain model for administrators and certificate recipients."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = (ROLE_ADMIN, ROLE_USER)


@dataclass(slots=True)
class Account:
    """
    Registered identity.

    Attributes:
        id: Opaque unique identifier, assigned at creation
        email: Login key, unique across accounts (compared case-sensitively)
        full_name: Display name, the only mutable field
        role: Either ``admin`` or ``user``, fixed at creation
        created_at: Creation timestamp (UTC)
    """

    id: str
    email: str
    full_name: str
    role: str
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def renamed(self, full_name: str) -> "Account":
        return replace(self, full_name=full_name)
