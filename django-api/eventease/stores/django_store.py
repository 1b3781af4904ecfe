"""Django implementations of the stores.

The event catalog is read through the ORM; key-value storage goes through
the Django cache framework.
"""

from datetime import datetime
from decimal import Decimal

import structlog
from django.core.cache import caches

from eventease import conf, models
from eventease.domain import Capacity, Event, Money
from eventease.domain.errors import StorageError
from eventease.stores.interfaces import EventCatalog, KeyValueStorage

logger = structlog.get_logger(__name__)


def _to_domain(row: models.Event) -> Event:
    return Event(
        id=row.pk,
        name=row.name,
        capacity=Capacity(row.capacity),
        price=Money(Decimal(row.price)),
        category=row.category,
        location=row.location,
        date=row.date,
        description=row.description,
        organizer=row.organizer,
    )


class DjangoEventCatalog(EventCatalog):
    """Database-backed event catalog using Django ORM."""

    def get_by_id(self, event_id: int) -> Event | None:
        row = models.Event.objects.filter(pk=event_id).first()
        return _to_domain(row) if row is not None else None

    def get_all(self) -> list[Event]:
        return [_to_domain(row) for row in models.Event.objects.all()]

    def get_by_category(self, category: str) -> list[Event]:
        queryset = models.Event.objects.all()
        if category:
            queryset = queryset.filter(category__iexact=category)
        return [_to_domain(row) for row in queryset]

    def search(
        self,
        name: str | None = None,
        location: str | None = None,
        category: str | None = None,
        date: datetime | None = None,
    ) -> list[Event]:
        queryset = models.Event.objects.all()
        if name:
            queryset = queryset.filter(name__icontains=name)
        if location:
            queryset = queryset.filter(location__icontains=location)
        if category:
            queryset = queryset.filter(category__iexact=category)
        if date is not None:
            queryset = queryset.filter(date__date=date.date())
        return [_to_domain(row) for row in queryset]


class CacheKeyValueStorage(KeyValueStorage):
    """Durable key-value storage on a Django cache backend.

    Entries never time out; the cache alias must point at a persistent
    backend (file, database, redis) for values to survive restarts.
    """

    def __init__(self, alias: str | None = None) -> None:
        self._alias = alias or conf.STORAGE_CACHE_ALIAS

    @property
    def _cache(self):
        return caches[self._alias]

    def get(self, key: str) -> str | None:
        try:
            return self._cache.get(key)
        except Exception as e:
            logger.error("storage_read_failed", key=key, alias=self._alias, error=str(e))
            raise StorageError(key, str(e)) from e

    def set(self, key: str, value: str) -> None:
        try:
            self._cache.set(key, value, timeout=None)
        except Exception as e:
            logger.error("storage_write_failed", key=key, alias=self._alias, error=str(e))
            raise StorageError(key, str(e)) from e

    def remove(self, key: str) -> None:
        try:
            self._cache.delete(key)
        except Exception as e:
            logger.error("storage_delete_failed", key=key, alias=self._alias, error=str(e))
            raise StorageError(key, str(e)) from e
