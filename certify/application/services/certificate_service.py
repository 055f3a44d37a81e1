from __future__ import annotations

import logging
import secrets
import string
import time
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from ...domain.errors import NoEligibleRecipient, NotFound
from ...domain.models import (
    DELIVERY_PENDING,
    DELIVERY_STATUSES,
    ROLE_USER,
    Certificate,
)
from ...domain.ports.persistence import CertificateRepository, EventRepository
from .account_service import AccountDirectory

logger = logging.getLogger(__name__)

_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase
_SUFFIX_LENGTH = 9


def generate_certificate_number() -> str:
    """Return ``CERT-<epoch millis>-<9 random base-36 characters>``."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"CERT-{millis}-{suffix}"


class CertificateRegistry:
    """Issues certificates, tracks their delivery and answers public verification."""

    MAX_NUMBER_ATTEMPTS = 10

    def __init__(
        self,
        persistence: CertificateRepository,
        events: EventRepository,
        accounts: AccountDirectory,
        *,
        legacy_recipient_fallback: bool = False,
        number_factory: Callable[[], str] = generate_certificate_number,
    ) -> None:
        self._persistence = persistence
        self._events = events
        self._accounts = accounts
        self._legacy_recipient_fallback = legacy_recipient_fallback
        self._number_factory = number_factory

    # Public query helpers -------------------------------------------------
    def list(self) -> List[Certificate]:
        return self._persistence.load_certificates()

    def get(self, certificate_id: str) -> Optional[Certificate]:
        return next((item for item in self._persistence.load_certificates() if item.id == certificate_id), None)

    def list_for_account(self, account_id: str) -> List[Certificate]:
        return [item for item in self._persistence.load_certificates() if item.user_id == account_id]

    def verify_by_number(self, certificate_number: str) -> Optional[Certificate]:
        """Public lookup by certificate number. Needs no session and never raises."""
        number = (certificate_number or "").strip()
        if not number:
            return None
        try:
            certificates = self._persistence.load_certificates()
        except ValueError:
            logger.exception("Stored certificates could not be decoded")
            return None
        return next((item for item in certificates if item.certificate_number == number), None)

    def summary(self) -> Dict[str, int]:
        certificates = self._persistence.load_certificates()
        counts = {status: 0 for status in DELIVERY_STATUSES}
        for item in certificates:
            counts[item.delivery_status] = counts.get(item.delivery_status, 0) + 1
        return {
            "total": len(certificates),
            "verified": sum(1 for item in certificates if item.verified),
            **counts,
        }

    # Mutations ------------------------------------------------------------
    def issue(self, event_id: str, recipient_account_id: Optional[str] = None) -> Certificate:
        """
        Issue a certificate for ``event_id``.

        Without an explicit recipient the first ``user`` account in
        registration order is chosen, but only when the legacy fallback is
        enabled.

        Raises:
            NotFound: If the event or the explicit recipient does not exist
            NoEligibleRecipient: If no recipient was given and none can be picked
        """
        event = next((item for item in self._events.load_events() if item.id == event_id), None)
        if event is None:
            raise NotFound(f"Event {event_id} not found.")

        if recipient_account_id is not None:
            recipient = self._accounts.get(recipient_account_id)
            if recipient is None:
                raise NotFound(f"Account {recipient_account_id} not found.")
        elif self._legacy_recipient_fallback:
            recipient = self._accounts.first_with_role(ROLE_USER)
            if recipient is None:
                raise NoEligibleRecipient("No users available to issue certificates.")
        else:
            raise NoEligibleRecipient("A recipient account is required to issue a certificate.")

        certificates = self._persistence.load_certificates()
        certificate = Certificate(
            id=str(uuid.uuid4()),
            event_id=event.id,
            user_id=recipient.id,
            certificate_number=self._unique_number(certificates),
            issued_at=datetime.now(timezone.utc),
            verified=True,
            delivery_status=DELIVERY_PENDING,
            event_title=event.title,
        )
        certificates.append(certificate)
        self._persistence.save_certificates(certificates)
        logger.info(
            "Certificate %s issued to %s for event %s",
            certificate.certificate_number,
            recipient.email,
            event.id,
        )
        return certificate

    def update_delivery_status(self, certificate_id: str, status: str) -> Certificate:
        if status not in DELIVERY_STATUSES:
            raise ValueError(f"Unknown delivery status: {status}")
        certificates = self._persistence.load_certificates()
        for index, item in enumerate(certificates):
            if item.id == certificate_id:
                break
        else:
            raise NotFound(f"Certificate {certificate_id} not found.")

        updated = replace(item, delivery_status=status)
        certificates[index] = updated
        self._persistence.save_certificates(certificates)
        logger.info("Certificate %s delivery status %s -> %s", certificate_id, item.delivery_status, status)
        return updated

    def delete_for_event(self, event_id: str) -> int:
        certificates = self._persistence.load_certificates()
        remaining = [item for item in certificates if item.event_id != event_id]
        removed = len(certificates) - len(remaining)
        if removed:
            self._persistence.save_certificates(remaining)
        return removed

    # Internal helpers -----------------------------------------------------
    def _unique_number(self, certificates: List[Certificate]) -> str:
        taken = {item.certificate_number for item in certificates}
        for _ in range(self.MAX_NUMBER_ATTEMPTS):
            number = self._number_factory()
            if number not in taken:
                return number
            logger.debug("Certificate number %s already taken, retrying", number)
        raise RuntimeError("Unable to generate a unique certificate number.")
