"""Key-value adapters and the JSON collection bindings."""

import json
from datetime import date, datetime, timezone

import pytest

from certify.domain.models import Account, Certificate, Event
from certify.infrastructure.persistence.memory import InMemoryKeyValueStore
from certify.infrastructure.persistence.sqlite import SQLiteKeyValueStore
from certify.infrastructure.repositories.key_value_gateway import (
    ACCOUNTS_KEY,
    CERTIFICATES_KEY,
    CREDENTIALS_KEY,
    EVENTS_KEY,
    SESSION_KEY,
    KeyValueGateway,
)

CREATED = datetime(2025, 1, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)

ACCOUNT = Account(id="acc-1", email="b@x.com", full_name="Bob Ünicode", role="user", created_at=CREATED)
EVENT = Event(
    id="evt-1",
    title="Workshop",
    description="Line one\nline two",
    event_date=date(2025, 1, 1),
    created_by="adm-1",
    created_at=CREATED,
)
CERTIFICATE = Certificate(
    id="crt-1",
    event_id="evt-1",
    user_id="acc-1",
    certificate_number="CERT-1735723815123-AB12CD34E",
    issued_at=CREATED,
    verified=True,
    delivery_status="sent",
    event_title="Workshop",
)


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLiteKeyValueStore(tmp_path / "nested" / "certify.db")
    yield store
    store.close()


class TestSQLiteStore:
    def test_get_set_remove(self, sqlite_store):
        assert sqlite_store.get("missing") is None
        sqlite_store.set("k", "v1")
        sqlite_store.set("k", "v2")
        assert sqlite_store.get("k") == "v2"
        assert sqlite_store.keys() == ["k"]
        sqlite_store.remove("k")
        sqlite_store.remove("k")
        assert sqlite_store.get("k") is None

    def test_durable_across_reopen(self, tmp_path):
        path = tmp_path / "certify.db"
        first = SQLiteKeyValueStore(path)
        KeyValueGateway(first).save_accounts([ACCOUNT])
        first.close()

        second = SQLiteKeyValueStore(path)
        try:
            assert KeyValueGateway(second).load_accounts() == [ACCOUNT]
        finally:
            second.close()


class TestRoundTrip:
    @pytest.fixture(params=["memory", "sqlite"])
    def gateway(self, request, tmp_path):
        if request.param == "memory":
            yield KeyValueGateway(InMemoryKeyValueStore())
            return
        store = SQLiteKeyValueStore(tmp_path / "certify.db")
        yield KeyValueGateway(store)
        store.close()

    def test_accounts(self, gateway):
        gateway.save_accounts([ACCOUNT])
        assert gateway.load_accounts() == [ACCOUNT]

    def test_credentials(self, gateway):
        gateway.save_credentials({"b@x.com": "pw2", "a@x.com": "pw1"})
        assert gateway.load_credentials() == {"b@x.com": "pw2", "a@x.com": "pw1"}

    def test_session(self, gateway):
        gateway.save_session(ACCOUNT)
        assert gateway.load_session() == ACCOUNT
        gateway.clear_session()
        assert gateway.load_session() is None

    def test_events(self, gateway):
        gateway.save_events([EVENT])
        assert gateway.load_events() == [EVENT]

    def test_certificates(self, gateway):
        untitled = Certificate(
            id="crt-2",
            event_id="evt-1",
            user_id="acc-1",
            certificate_number="CERT-1735723815124-ZZZZZZZZZ",
            issued_at=CREATED,
            verified=False,
            delivery_status="pending",
        )
        gateway.save_certificates([CERTIFICATE, untitled])
        assert gateway.load_certificates() == [CERTIFICATE, untitled]

    def test_empty_store(self, gateway):
        assert gateway.load_accounts() == []
        assert gateway.load_credentials() == {}
        assert gateway.load_session() is None
        assert gateway.load_events() == []
        assert gateway.load_certificates() == []


class TestDocumentLayout:
    def test_camel_case_documents(self):
        store = InMemoryKeyValueStore()
        gateway = KeyValueGateway(store)
        gateway.save_accounts([ACCOUNT])
        gateway.save_events([EVENT])
        gateway.save_certificates([CERTIFICATE])
        gateway.save_credentials({"b@x.com": "pw2"})
        gateway.save_session(ACCOUNT)

        assert set(json.loads(store.get(ACCOUNTS_KEY))[0]) == {"id", "email", "fullName", "role", "createdAt"}
        assert json.loads(store.get(EVENTS_KEY))[0]["eventDate"] == "2025-01-01"
        certificate_doc = json.loads(store.get(CERTIFICATES_KEY))[0]
        assert certificate_doc["certificateNumber"] == CERTIFICATE.certificate_number
        assert certificate_doc["deliveryStatus"] == "sent"
        assert certificate_doc["eventTitle"] == "Workshop"
        assert json.loads(store.get(CREDENTIALS_KEY)) == {"b@x.com": "pw2"}
        assert json.loads(store.get(SESSION_KEY))["id"] == ACCOUNT.id

    def test_reads_browser_era_documents(self):
        store = InMemoryKeyValueStore(
            {
                EVENTS_KEY: json.dumps(
                    [
                        {
                            "id": "e1",
                            "title": "Workshop",
                            "description": "",
                            "eventDate": "2025-01-01",
                            "createdBy": "a1",
                            "createdAt": "2025-01-01T10:00:00.000Z",
                        }
                    ]
                )
            }
        )

        event = KeyValueGateway(store).load_events()[0]

        assert event.created_at == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
        assert event.event_date == date(2025, 1, 1)

    @pytest.mark.parametrize("raw", ["{}", json.dumps([{"id": "only"}])])
    def test_malformed_collection_raises(self, raw):
        store = InMemoryKeyValueStore({EVENTS_KEY: raw})
        with pytest.raises(ValueError):
            KeyValueGateway(store).load_events()

    @pytest.mark.parametrize("field,value", [("createdAt", None), ("eventDate", None), ("eventDate", 20250101)])
    def test_non_string_timestamps_raise_value_error(self, field, value):
        doc = {
            "id": "e1",
            "title": "Workshop",
            "description": "",
            "eventDate": "2025-01-01",
            "createdBy": "a1",
            "createdAt": "2025-01-01T10:00:00.000Z",
        }
        doc[field] = value
        store = InMemoryKeyValueStore({EVENTS_KEY: json.dumps([doc])})

        with pytest.raises(ValueError):
            KeyValueGateway(store).load_events()
