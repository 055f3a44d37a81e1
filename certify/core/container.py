from dataclasses import dataclass

from ..application.services.account_service import AccountDirectory
from ..application.services.certificate_service import CertificateRegistry
from ..application.services.event_service import EventCatalog
from ..application.services.session_service import SessionManager
from .config import Settings
from ..domain.ports.persistence import KeyValueStore, PersistenceGateway
from ..services.token_service import TokenService


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    store: KeyValueStore
    persistence: PersistenceGateway
    session_manager: SessionManager
    account_directory: AccountDirectory
    event_catalog: EventCatalog
    certificate_registry: CertificateRegistry
    token_service: TokenService
