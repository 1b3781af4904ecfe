"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest

from eventease.domain import Capacity, Event, Money, Registration
from eventease.domain.errors import StorageError
from eventease.services import AttendanceTracker, EventService, RegistrationCoordinator, SessionStore
from eventease.stores import (
    InMemoryEventCatalog,
    InMemoryKeyValueStorage,
    KeyValueAttendanceRepository,
    KeyValueSessionRepository,
    KeyValueStorage,
)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FailingStorage(KeyValueStorage):
    """Storage whose backend is always down."""

    def get(self, key: str) -> str | None:
        raise StorageError(key, "backend unavailable")

    def set(self, key: str, value: str) -> None:
        raise StorageError(key, "backend unavailable")

    def remove(self, key: str) -> None:
        raise StorageError(key, "backend unavailable")


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 14, 9, 0, tzinfo=dt_timezone.utc))


@pytest.fixture
def catalog() -> InMemoryEventCatalog:
    return InMemoryEventCatalog(
        [
            Event(
                id=1,
                name="Tech Conference 2026",
                capacity=Capacity(10),
                price=Money(Decimal("99.00")),
                category="Technology",
                location="Seattle Convention Center",
                date=datetime(2026, 4, 2, 9, 0, tzinfo=dt_timezone.utc),
            ),
            Event(
                id=2,
                name="Jazz Under the Stars",
                capacity=Capacity(0),
                price=Money(Decimal("25.00")),
                category="Music",
                location="Riverside Park",
                date=datetime(2026, 5, 9, 19, 30, tzinfo=dt_timezone.utc),
            ),
            Event(
                id=3,
                name="Startup Pitch Night",
                capacity=Capacity(50),
                price=Money(Decimal("0")),
                category="Business",
                location="Seattle Hub",
            ),
        ]
    )


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def event_service(catalog: InMemoryEventCatalog) -> EventService:
    return EventService(catalog)


@pytest.fixture
def coordinator(event_service: EventService, clock: FakeClock) -> RegistrationCoordinator:
    return RegistrationCoordinator(event_service, clock=clock)


@pytest.fixture
def session_store(storage: InMemoryKeyValueStorage, clock: FakeClock) -> SessionStore:
    store = SessionStore(KeyValueSessionRepository(storage), clock=clock)
    store.initialize()
    return store


@pytest.fixture
def tracker(storage: InMemoryKeyValueStorage, session_store: SessionStore, clock: FakeClock) -> AttendanceTracker:
    attendance = AttendanceTracker(KeyValueAttendanceRepository(storage), session_store, clock=clock)
    attendance.initialize()
    return attendance


@pytest.fixture
def make_registration():
    def _make(**overrides) -> Registration:
        data = {
            "event_id": 1,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "phone_number": "555-0100",
            "number_of_attendees": 1,
            "agree_to_terms": True,
        }
        data.update(overrides)
        return Registration(**data)

    return _make


@pytest.fixture
def capture_signal():
    """Connect a recording receiver to a signal for the duration of a test."""
    connected = []

    def _capture(signal) -> list[dict]:
        received: list[dict] = []

        def receiver(sender, **kwargs):
            kwargs.pop("signal", None)
            received.append(kwargs)

        signal.connect(receiver, weak=False)
        connected.append((signal, receiver))
        return received

    yield _capture
    for signal, receiver in connected:
        signal.disconnect(receiver)
