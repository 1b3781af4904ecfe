"""Event service - read access to the event catalog.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from datetime import datetime

from eventease.domain import Event
from eventease.domain.errors import EventNotFoundError
from eventease.stores.interfaces import EventCatalog


class EventService:
    """Service for event catalog operations."""

    def __init__(self, catalog: EventCatalog) -> None:
        self._catalog = catalog

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._catalog.get_all()

    def get_event(self, event_id: int) -> Event:
        """Return an event by ID.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._catalog.get_by_id(event_id)
        if event is None:
            raise EventNotFoundError()
        return event

    def events_by_category(self, category: str) -> list[Event]:
        return self._catalog.get_by_category(category)

    def search_events(
        self,
        name: str | None = None,
        location: str | None = None,
        category: str | None = None,
        date: datetime | None = None,
    ) -> list[Event]:
        return self._catalog.search(name=name, location=location, category=category, date=date)
