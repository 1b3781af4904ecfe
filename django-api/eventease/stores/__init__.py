from eventease.stores.django_store import CacheKeyValueStorage, DjangoEventCatalog
from eventease.stores.interfaces import (
    AttendanceRepository,
    EventCatalog,
    KeyValueStorage,
    RegistrationRepository,
    SessionRepository,
)
from eventease.stores.keyvalue_store import (
    KeyValueAttendanceRepository,
    KeyValueRegistrationRepository,
    KeyValueSessionRepository,
)
from eventease.stores.memory_store import (
    InMemoryEventCatalog,
    InMemoryKeyValueStorage,
    InMemoryRegistrationRepository,
)

__all__ = [
    "AttendanceRepository",
    "CacheKeyValueStorage",
    "DjangoEventCatalog",
    "EventCatalog",
    "InMemoryEventCatalog",
    "InMemoryKeyValueStorage",
    "InMemoryRegistrationRepository",
    "KeyValueAttendanceRepository",
    "KeyValueRegistrationRepository",
    "KeyValueSessionRepository",
    "KeyValueStorage",
    "RegistrationRepository",
    "SessionRepository",
]
