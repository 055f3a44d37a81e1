"""JSON collection bindings over a key-value store."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ...domain.models import Account, Certificate, Event
from ...domain.ports.persistence import KeyValueStore, PersistenceGateway

T = TypeVar("T")

ACCOUNTS_KEY = "accounts"
CREDENTIALS_KEY = "credentials"
SESSION_KEY = "current_session"
EVENTS_KEY = "events"
CERTIFICATES_KEY = "certificates"


class KeyValueGateway(PersistenceGateway):
    """Stores each collection as one JSON document under a fixed key.

    Every save rewrites the whole collection. Field names in the stored
    documents are camelCase so existing browser-era data loads unchanged.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # AccountRepository API --------------------------------------------------
    def load_accounts(self) -> List[Account]:
        return self._load_list(ACCOUNTS_KEY, self._doc_to_account)

    def save_accounts(self, accounts: List[Account]) -> None:
        self._write(ACCOUNTS_KEY, [self._account_to_doc(item) for item in accounts])

    # CredentialRepository API -----------------------------------------------
    def load_credentials(self) -> Dict[str, str]:
        raw = self._store.get(CREDENTIALS_KEY)
        if not raw:
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("Stored credentials must be a JSON object.")
        return {str(key): str(value) for key, value in data.items()}

    def save_credentials(self, credentials: Dict[str, str]) -> None:
        self._write(CREDENTIALS_KEY, dict(credentials))

    # SessionRepository API --------------------------------------------------
    def load_session(self) -> Optional[Account]:
        raw = self._store.get(SESSION_KEY)
        if not raw:
            return None
        doc = json.loads(raw)
        if not isinstance(doc, dict):
            raise ValueError("Stored session must be a JSON object.")
        return self._doc_to_account(doc)

    def save_session(self, account: Account) -> None:
        self._write(SESSION_KEY, self._account_to_doc(account))

    def clear_session(self) -> None:
        self._store.remove(SESSION_KEY)

    # EventRepository API ----------------------------------------------------
    def load_events(self) -> List[Event]:
        return self._load_list(EVENTS_KEY, self._doc_to_event)

    def save_events(self, events: List[Event]) -> None:
        self._write(EVENTS_KEY, [self._event_to_doc(item) for item in events])

    # CertificateRepository API ----------------------------------------------
    def load_certificates(self) -> List[Certificate]:
        return self._load_list(CERTIFICATES_KEY, self._doc_to_certificate)

    def save_certificates(self, certificates: List[Certificate]) -> None:
        self._write(CERTIFICATES_KEY, [self._certificate_to_doc(item) for item in certificates])

    # Helpers ----------------------------------------------------------------
    def _write(self, key: str, value: Any) -> None:
        self._store.set(key, json.dumps(value, ensure_ascii=False))

    def _load_list(self, key: str, convert: Callable[[Dict[str, Any]], T]) -> List[T]:
        raw = self._store.get(key)
        if not raw:
            return []
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"Stored {key} must be a JSON array.")
        return [convert(item) for item in data]

    @staticmethod
    def _format_datetime(value: datetime) -> str:
        return value.isoformat()

    @staticmethod
    def _parse_datetime(value: str) -> datetime:
        if not isinstance(value, str):
            raise ValueError(f"Expected an ISO timestamp, got {value!r}")
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        result = datetime.fromisoformat(text)
        if result.tzinfo is None:
            return result.replace(tzinfo=timezone.utc)
        return result.astimezone(timezone.utc)

    @staticmethod
    def _parse_date(value: str) -> date:
        if not isinstance(value, str):
            raise ValueError(f"Expected an ISO date, got {value!r}")
        # Browser date inputs occasionally carried a time part.
        return date.fromisoformat(value[:10])

    def _account_to_doc(self, account: Account) -> Dict[str, Any]:
        return {
            "id": account.id,
            "email": account.email,
            "fullName": account.full_name,
            "role": account.role,
            "createdAt": self._format_datetime(account.created_at),
        }

    def _doc_to_account(self, doc: Dict[str, Any]) -> Account:
        try:
            return Account(
                id=str(doc["id"]),
                email=str(doc["email"]),
                full_name=str(doc.get("fullName") or ""),
                role=str(doc["role"]),
                created_at=self._parse_datetime(doc["createdAt"]),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed account record: {exc}") from exc

    def _event_to_doc(self, event: Event) -> Dict[str, Any]:
        return {
            "id": event.id,
            "title": event.title,
            "description": event.description,
            "eventDate": event.event_date.isoformat(),
            "createdBy": event.created_by,
            "createdAt": self._format_datetime(event.created_at),
        }

    def _doc_to_event(self, doc: Dict[str, Any]) -> Event:
        try:
            return Event(
                id=str(doc["id"]),
                title=str(doc["title"]),
                description=str(doc.get("description") or ""),
                event_date=self._parse_date(doc["eventDate"]),
                created_by=str(doc["createdBy"]),
                created_at=self._parse_datetime(doc["createdAt"]),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed event record: {exc}") from exc

    def _certificate_to_doc(self, certificate: Certificate) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "id": certificate.id,
            "eventId": certificate.event_id,
            "userId": certificate.user_id,
            "certificateNumber": certificate.certificate_number,
            "issuedAt": self._format_datetime(certificate.issued_at),
            "verified": certificate.verified,
            "deliveryStatus": certificate.delivery_status,
        }
        if certificate.event_title is not None:
            doc["eventTitle"] = certificate.event_title
        return doc

    def _doc_to_certificate(self, doc: Dict[str, Any]) -> Certificate:
        try:
            title = doc.get("eventTitle")
            return Certificate(
                id=str(doc["id"]),
                event_id=str(doc["eventId"]),
                user_id=str(doc["userId"]),
                certificate_number=str(doc["certificateNumber"]),
                issued_at=self._parse_datetime(doc["issuedAt"]),
                verified=bool(doc.get("verified", False)),
                delivery_status=str(doc["deliveryStatus"]),
                event_title=str(title) if title is not None else None,
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed certificate record: {exc}") from exc
