"""Tests for store implementations.

Run with: pytest tests/test_stores.py -v
"""

from datetime import datetime
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest

from eventease import models
from eventease.domain import Money, Registration, RegistrationStatus, UserSession
from eventease.domain.errors import ErrorCode, StorageError
from eventease.stores import (
    CacheKeyValueStorage,
    DjangoEventCatalog,
    KeyValueAttendanceRepository,
    KeyValueRegistrationRepository,
    KeyValueSessionRepository,
)


@pytest.fixture
def event_rows(db):
    return [
        models.Event.objects.create(
            name="Tech Conference 2026",
            category="Technology",
            location="Seattle Convention Center",
            date=datetime(2026, 4, 2, 9, 0, tzinfo=dt_timezone.utc),
            price=Decimal("99.00"),
            capacity=10,
        ),
        models.Event.objects.create(
            name="Jazz Under the Stars",
            category="Music",
            location="Riverside Park",
            date=datetime(2026, 5, 9, 19, 30, tzinfo=dt_timezone.utc),
            capacity=0,
        ),
    ]


@pytest.mark.django_db
class TestDjangoEventCatalog:
    def test_get_by_id_maps_to_domain(self, event_rows):
        event = DjangoEventCatalog().get_by_id(event_rows[0].pk)
        assert event.name == "Tech Conference 2026"
        assert event.price == Money(Decimal("99.00"))
        assert event.capacity.value == 10

    def test_get_by_id_missing(self, event_rows):
        assert DjangoEventCatalog().get_by_id(9999) is None

    def test_get_all_orders_by_date(self, event_rows):
        assert [event.name for event in DjangoEventCatalog().get_all()] == [
            "Tech Conference 2026",
            "Jazz Under the Stars",
        ]

    def test_get_by_category_ignores_case(self, event_rows):
        assert [event.name for event in DjangoEventCatalog().get_by_category("MUSIC")] == ["Jazz Under the Stars"]

    def test_search(self, event_rows):
        catalog = DjangoEventCatalog()
        assert len(catalog.search(name="conference")) == 1
        assert len(catalog.search(location="park", category="music")) == 1
        assert [e.name for e in catalog.search(date=datetime(2026, 4, 2, tzinfo=dt_timezone.utc))] == [
            "Tech Conference 2026"
        ]


class TestCacheKeyValueStorage:
    def test_round_trip(self):
        storage = CacheKeyValueStorage()
        storage.set("key", "value")
        assert storage.get("key") == "value"
        storage.remove("key")
        assert storage.get("key") is None

    def test_unknown_alias_raises_storage_error(self):
        storage = CacheKeyValueStorage(alias="missing")
        with pytest.raises(StorageError) as excinfo:
            storage.get("key")
        assert excinfo.value.code is ErrorCode.STORAGE_FAILURE


class TestKeyValueRepositories:
    def test_registration_round_trip(self, storage, clock):
        repository = KeyValueRegistrationRepository(storage)
        registration = Registration(
            event_id=1,
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            phone_number="555-0100",
            number_of_attendees=2,
            agree_to_terms=True,
            registration_id=7,
            registration_date=clock.now,
            status=RegistrationStatus.WAITLIST,
        )

        repository.save_all([registration])
        loaded = repository.load_all()

        assert loaded == [registration]

    def test_missing_key_loads_empty(self, storage):
        assert KeyValueRegistrationRepository(storage).load_all() == []
        assert KeyValueAttendanceRepository(storage).load_all() == []
        assert KeyValueSessionRepository(storage).load() is None

    def test_corrupt_json_raises_storage_error(self, storage):
        storage.set("eventease_registrations", "{not json")
        with pytest.raises(StorageError):
            KeyValueRegistrationRepository(storage).load_all()

    def test_invalid_payload_raises_storage_error(self, storage):
        storage.set("eventease_attendance_records", '[{"event_id": "one"}]')
        with pytest.raises(StorageError):
            KeyValueAttendanceRepository(storage).load_all()

    def test_custom_key(self, storage):
        repository = KeyValueAttendanceRepository(storage, key="other")
        repository.save_all([])
        assert storage.get("other") == "[]"

    def test_decimal_and_set_values_are_encoded(self, storage, clock):
        repository = KeyValueSessionRepository(storage)
        session = UserSession.start(clock.now)
        session.custom_data = {"budget": Decimal("12.50"), "tags": {"a"}}

        repository.save(session)

        assert repository.load().custom_data == {"budget": 12.5, "tags": ["a"]}

    def test_unserializable_value_raises_storage_error(self, storage, clock):
        session = UserSession.start(clock.now)
        session.custom_data = {"widget": object()}

        with pytest.raises(StorageError) as excinfo:
            KeyValueSessionRepository(storage).save(session)

        assert excinfo.value.code is ErrorCode.STORAGE_FAILURE
        assert storage.get("eventease_user_session") is None
