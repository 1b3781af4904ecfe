"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from eventease.domain import AttendanceRecord, Event, Registration, UserSession


class EventCatalog(ABC):
    """Read-only lookup of catalog events."""

    @abstractmethod
    def get_by_id(self, event_id: int) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_all(self) -> list[Event]:
        """Return all events."""
        ...

    @abstractmethod
    def get_by_category(self, category: str) -> list[Event]:
        """Return events in a category (case-insensitive). Empty category returns all."""
        ...

    @abstractmethod
    def search(
        self,
        name: str | None = None,
        location: str | None = None,
        category: str | None = None,
        date: datetime | None = None,
    ) -> list[Event]:
        """Return events matching every given filter."""
        ...


class KeyValueStorage(ABC):
    """Durable string storage keyed by name.

    Implementations raise StorageError when the backend fails.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class RegistrationRepository(ABC):
    """Interface for registration persistence."""

    @abstractmethod
    def load_all(self) -> list[Registration]:
        ...

    @abstractmethod
    def save_all(self, registrations: list[Registration]) -> None:
        """Replace the stored set with ``registrations``."""
        ...


class AttendanceRepository(ABC):
    """Interface for attendance record persistence."""

    @abstractmethod
    def load_all(self) -> list[AttendanceRecord]:
        ...

    @abstractmethod
    def save_all(self, records: list[AttendanceRecord]) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class SessionRepository(ABC):
    """Interface for persisting the single active user session."""

    @abstractmethod
    def load(self) -> UserSession | None:
        """Return the stored session, or None when nothing is stored."""
        ...

    @abstractmethod
    def save(self, session: UserSession) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
