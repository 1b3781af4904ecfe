"""Process-resident store implementations.

``InMemoryRegistrationRepository`` is the default registration store;
the others back tests and single-process use.
"""

from datetime import datetime

from eventease.domain import Event, Registration
from eventease.stores.interfaces import EventCatalog, KeyValueStorage, RegistrationRepository


class InMemoryEventCatalog(EventCatalog):
    def __init__(self, events: list[Event] | None = None) -> None:
        self._events = {event.id: event for event in events or []}

    def add(self, event: Event) -> None:
        self._events[event.id] = event

    def get_by_id(self, event_id: int) -> Event | None:
        return self._events.get(event_id)

    def get_all(self) -> list[Event]:
        return list(self._events.values())

    def get_by_category(self, category: str) -> list[Event]:
        if not category:
            return self.get_all()
        return [event for event in self._events.values() if event.category.lower() == category.lower()]

    def search(
        self,
        name: str | None = None,
        location: str | None = None,
        category: str | None = None,
        date: datetime | None = None,
    ) -> list[Event]:
        events = self.get_all()
        if name:
            events = [event for event in events if name.lower() in event.name.lower()]
        if location:
            events = [event for event in events if location.lower() in event.location.lower()]
        if category:
            events = [event for event in events if event.category.lower() == category.lower()]
        if date is not None:
            events = [event for event in events if event.date is not None and event.date.date() == date.date()]
        return events


class InMemoryKeyValueStorage(KeyValueStorage):
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class InMemoryRegistrationRepository(RegistrationRepository):
    """Keeps registrations for the lifetime of the process only."""

    def __init__(self) -> None:
        self._registrations: list[Registration] = []

    def load_all(self) -> list[Registration]:
        return list(self._registrations)

    def save_all(self, registrations: list[Registration]) -> None:
        self._registrations = list(registrations)
