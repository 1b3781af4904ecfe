"""Repositories that persist domain models as JSON in a KeyValueStorage."""

import orjson
import structlog
from rest_framework import serializers
from rest_framework.utils.encoders import JSONEncoder

from eventease import conf
from eventease.domain import AttendanceRecord, Registration, UserSession
from eventease.domain.errors import StorageError
from eventease.serializers import AttendanceRecordSerializer, RegistrationSerializer, UserSessionSerializer
from eventease.stores.interfaces import (
    AttendanceRepository,
    KeyValueStorage,
    RegistrationRepository,
    SessionRepository,
)

logger = structlog.get_logger(__name__)

_fallback_encoder = JSONEncoder()


def _decode(key: str, raw: str, serializer_class: type[serializers.Serializer], many: bool = False):
    """Validate a stored payload and return the domain object(s) it holds.

    Raises:
        StorageError: If the payload is not valid JSON or fails validation.
    """
    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise StorageError(key, f"corrupt payload: {e}") from e
    serializer = serializer_class(data=payload, many=many)
    if not serializer.is_valid():
        logger.warning("storage_payload_invalid", key=key, errors=serializer.errors)
        raise StorageError(key, "payload failed validation")
    return serializer.save()


def _encode(key: str, data) -> str:
    """Serialize to JSON, falling back to DRF's encoder for Decimal, set and similar.

    Raises:
        StorageError: If a value has no JSON representation.
    """
    try:
        return orjson.dumps(data, default=_fallback_encoder.default).decode()
    except orjson.JSONEncodeError as e:
        raise StorageError(key, f"unserializable value: {e}") from e


class KeyValueRegistrationRepository(RegistrationRepository):
    """Registrations persisted under a single storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = conf.REGISTRATION_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def load_all(self) -> list[Registration]:
        raw = self._storage.get(self._key)
        if not raw:
            return []
        return _decode(self._key, raw, RegistrationSerializer, many=True)

    def save_all(self, registrations: list[Registration]) -> None:
        self._storage.set(self._key, _encode(self._key, RegistrationSerializer(registrations, many=True).data))


class KeyValueAttendanceRepository(AttendanceRepository):
    """Attendance records persisted under a single storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = conf.ATTENDANCE_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def load_all(self) -> list[AttendanceRecord]:
        raw = self._storage.get(self._key)
        if not raw:
            return []
        return _decode(self._key, raw, AttendanceRecordSerializer, many=True)

    def save_all(self, records: list[AttendanceRecord]) -> None:
        self._storage.set(self._key, _encode(self._key, AttendanceRecordSerializer(records, many=True).data))

    def clear(self) -> None:
        self._storage.remove(self._key)


class KeyValueSessionRepository(SessionRepository):
    """The active session persisted under a single storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = conf.SESSION_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> UserSession | None:
        raw = self._storage.get(self._key)
        if not raw:
            return None
        return _decode(self._key, raw, UserSessionSerializer)

    def save(self, session: UserSession) -> None:
        self._storage.set(self._key, _encode(self._key, UserSessionSerializer(session).data))

    def clear(self) -> None:
        self._storage.remove(self._key)
