from __future__ import annotations

from typing import Dict, List, Optional, Protocol

from ..models import Account, Certificate, Event


class KeyValueStore(Protocol):
    """Durable mapping from string keys to serialized JSON strings."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class AccountRepository(Protocol):
    """Whole-collection access to registered accounts, in registration order."""

    def load_accounts(self) -> List[Account]:
        ...

    def save_accounts(self, accounts: List[Account]) -> None:
        ...


class CredentialRepository(Protocol):
    """Side table mapping an account email to its stored secret."""

    def load_credentials(self) -> Dict[str, str]:
        ...

    def save_credentials(self, credentials: Dict[str, str]) -> None:
        ...


class SessionRepository(Protocol):
    """Snapshot of the account signed in to the running process."""

    def load_session(self) -> Optional[Account]:
        ...

    def save_session(self, account: Account) -> None:
        ...

    def clear_session(self) -> None:
        ...


class EventRepository(Protocol):
    def load_events(self) -> List[Event]:
        ...

    def save_events(self, events: List[Event]) -> None:
        ...


class CertificateRepository(Protocol):
    def load_certificates(self) -> List[Certificate]:
        ...

    def save_certificates(self, certificates: List[Certificate]) -> None:
        ...


class PersistenceGateway(
    AccountRepository,
    CredentialRepository,
    SessionRepository,
    EventRepository,
    CertificateRepository,
    Protocol,
):
    """Composite gateway combining every persistence concern used by the app."""

    pass
