"""Test configuration and fixtures."""

import asyncio

import pytest

from certify.application.services.account_service import AccountDirectory
from certify.application.services.certificate_service import CertificateRegistry
from certify.application.services.event_service import EventCatalog
from certify.application.services.session_service import SessionManager
from certify.domain.models import ROLE_ADMIN, ROLE_USER
from certify.infrastructure.persistence.memory import InMemoryKeyValueStore
from certify.infrastructure.repositories.key_value_gateway import KeyValueGateway
from certify.services.credential_hasher import CredentialHasher


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def persistence(store):
    return KeyValueGateway(store)


@pytest.fixture
def sessions(persistence):
    return SessionManager(persistence)


@pytest.fixture
def directory(persistence, sessions):
    return AccountDirectory(persistence, persistence, sessions, CredentialHasher("plain"))


@pytest.fixture
def registry(persistence, directory):
    return CertificateRegistry(persistence, persistence, directory)


@pytest.fixture
def catalog(persistence, registry):
    return EventCatalog(persistence, registry)


@pytest.fixture
def admin(directory):
    return asyncio.run(directory.register("a@x.com", "pw1", "Alice Admin", ROLE_ADMIN))


@pytest.fixture
def user(directory, admin):
    return asyncio.run(directory.register("b@x.com", "pw2", "Bob User", ROLE_USER))


@pytest.fixture
def workshop(catalog, admin):
    return catalog.create("Workshop", "Hands-on session", "2025-01-01", admin.id)
