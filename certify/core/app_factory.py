from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.services.account_service import AccountDirectory
from ..application.services.certificate_service import CertificateRegistry
from ..application.services.event_service import EventCatalog
from ..application.services.session_service import SessionManager
from ..domain.ports.persistence import KeyValueStore
from ..infrastructure.persistence.memory import InMemoryKeyValueStore
from ..infrastructure.persistence.sqlite import SQLiteKeyValueStore
from ..infrastructure.repositories.key_value_gateway import KeyValueGateway
from ..presentation.api.routers import auth as auth_router
from ..presentation.api.routers import certificates as certificates_router
from ..presentation.api.routers import events as events_router
from ..presentation.api.routers import verify as verify_router
from ..services.credential_hasher import CredentialHasher
from ..services.token_service import TokenService

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Certify", lifespan=_create_lifespan(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router.router)
    app.include_router(events_router.router)
    app.include_router(certificates_router.router)
    app.include_router(verify_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        container: ApplicationContainer = app.state.container  # type: ignore[attr-defined]
        return {"ok": True, "authenticated": container.session_manager.is_authenticated}

    return app


def create_store(settings: Settings) -> KeyValueStore:
    if settings.store_backend == "memory":
        logger.warning("Using the in-memory store; data will be lost on shutdown.")
        return InMemoryKeyValueStore()
    return SQLiteKeyValueStore(settings.database_path)


def build_container(settings: Settings, store: Optional[KeyValueStore] = None) -> ApplicationContainer:
    """Wire the services over ``store`` (or one created from ``settings``)."""
    store = store or create_store(settings)
    persistence = KeyValueGateway(store)
    hasher = CredentialHasher(settings.credential_scheme, rounds=settings.bcrypt_rounds)
    session_manager = SessionManager(persistence)
    account_directory = AccountDirectory(persistence, persistence, session_manager, hasher)
    certificate_registry = CertificateRegistry(
        persistence,
        persistence,
        account_directory,
        legacy_recipient_fallback=settings.legacy_recipient_fallback,
    )
    event_catalog = EventCatalog(persistence, certificate_registry)
    token_service = TokenService(settings.session_token_secret, settings.session_token_exp_minutes)
    return ApplicationContainer(
        settings=settings,
        store=store,
        persistence=persistence,
        session_manager=session_manager,
        account_directory=account_directory,
        event_catalog=event_catalog,
        certificate_registry=certificate_registry,
        token_service=token_service,
    )


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        container = build_container(settings)
        container.account_directory.ensure_default_admin(
            settings.admin_default_email,
            settings.admin_default_password,
            settings.admin_default_full_name,
        )
        container.session_manager.restore(container.persistence)

        app.state.container = container  # type: ignore[attr-defined]

        try:
            yield
        finally:
            close = getattr(container.store, "close", None)
            if close is not None:
                close()

    return lifespan
