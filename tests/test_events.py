"""Event catalog CRUD and cascading deletion."""

from datetime import date

import pytest

from certify.domain.errors import NotFound
from certify.infrastructure.repositories.key_value_gateway import EVENTS_KEY


class TestCreate:
    def test_create_assigns_identity(self, catalog, admin):
        event = catalog.create("Workshop", "Intro", "2025-01-01", admin.id)

        assert event.title == "Workshop"
        assert event.event_date == date(2025, 1, 1)
        assert event.created_by == admin.id
        assert event.created_at.tzinfo is not None
        assert catalog.list() == [event]

    def test_accepts_date_objects(self, catalog, admin):
        event = catalog.create("Talk", "", date(2024, 5, 6), admin.id)
        assert event.event_date == date(2024, 5, 6)

    @pytest.mark.parametrize(
        "title,event_date",
        [("", "2025-01-01"), ("   ", "2025-01-01"), ("Workshop", ""), ("Workshop", None), ("Workshop", "01/01/2025")],
    )
    def test_rejects_missing_fields_without_writes(self, catalog, store, admin, title, event_date):
        with pytest.raises(ValueError):
            catalog.create(title, "", event_date, admin.id)
        assert store.get(EVENTS_KEY) is None

    def test_list_keeps_insertion_order(self, catalog, admin):
        titles = ["B", "A", "C"]
        for title in titles:
            catalog.create(title, "", "2025-02-01", admin.id)
        assert [item.title for item in catalog.list()] == titles


class TestUpdate:
    def test_partial_update(self, catalog, workshop):
        updated = catalog.update(workshop.id, description="Updated agenda")

        assert updated.description == "Updated agenda"
        assert updated.title == workshop.title
        assert updated.event_date == workshop.event_date
        assert updated.created_by == workshop.created_by
        assert updated.created_at == workshop.created_at
        assert catalog.get(workshop.id) == updated

    def test_update_title_and_date(self, catalog, workshop):
        updated = catalog.update(workshop.id, title="Masterclass", event_date="2025-03-04")

        assert updated.title == "Masterclass"
        assert updated.event_date == date(2025, 3, 4)

    def test_unknown_event(self, catalog, workshop):
        with pytest.raises(NotFound):
            catalog.update("missing", title="Nope")

    def test_blank_title_rejected(self, catalog, workshop):
        with pytest.raises(ValueError):
            catalog.update(workshop.id, title=" ")
        assert catalog.get(workshop.id) == workshop


class TestDelete:
    def test_cascades_to_matching_certificates_only(self, catalog, registry, admin, user, workshop):
        other = catalog.create("Hackathon", "", "2025-06-01", admin.id)
        doomed = [registry.issue(workshop.id, user.id), registry.issue(workshop.id, admin.id)]
        kept = registry.issue(other.id, user.id)

        catalog.delete(workshop.id)

        assert catalog.list() == [other]
        assert registry.list() == [kept]
        for certificate in doomed:
            assert registry.verify_by_number(certificate.certificate_number) is None

    def test_unknown_event_is_noop(self, catalog, registry, persistence, user, workshop):
        certificate = registry.issue(workshop.id, user.id)
        events_before = persistence.load_events()

        catalog.delete("missing")

        assert persistence.load_events() == events_before
        assert registry.list() == [certificate]

    def test_delete_is_idempotent(self, catalog, workshop):
        catalog.delete(workshop.id)
        catalog.delete(workshop.id)
        assert catalog.list() == []
