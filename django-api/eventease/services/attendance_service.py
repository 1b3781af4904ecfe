"""Attendance service - per-user, per-event attendance lifecycle.

    REGISTERED --check_in--> PRESENT --check_out--> CHECKED_OUT
    REGISTERED --mark_absent--> ABSENT
    any state but PRESENT --cancel_registration--> CANCELLED

``check_in`` registers the user first when no record exists and otherwise
moves any non-PRESENT record to PRESENT. Registering again after a
cancellation reuses the cancelled record, so each (event, user) pair has at
most one record. Operations
that take an optional ``user_id`` act for the session user when it is
omitted, resolved at call time.
"""

from collections import defaultdict
from collections.abc import Callable
from datetime import datetime

import structlog
from django.utils import timezone

from eventease.domain import (
    AttendanceRecord,
    AttendanceStatus,
    EventAttendanceSummary,
    OperationResult,
    UserAttendanceHistory,
)
from eventease.domain.errors import (
    AttendanceRecordNotFoundError,
    DomainError,
    InvalidStateError,
    StorageError,
)
from eventease.services.session_service import SessionStore
from eventease.signals import attendance_changed
from eventease.stores.interfaces import AttendanceRepository

logger = structlog.get_logger(__name__)


class AttendanceTracker:
    """Owns attendance records and their state transitions."""

    def __init__(
        self,
        repository: AttendanceRepository,
        sessions: SessionStore,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._repository = repository
        self._sessions = sessions
        self._clock = clock
        self._records: list[AttendanceRecord] = []

    def initialize(self) -> None:
        """Load persisted records, starting empty if they cannot be read."""
        try:
            self._records = self._repository.load_all()
        except StorageError as e:
            logger.warning("attendance_load_failed", error=e.message)
            self._records = []

    def register(self, event_id: int, notes: str | None = None) -> OperationResult:
        user = self._sessions.current.user
        if self.is_registered(event_id, user.user_id):
            return OperationResult.failed(InvalidStateError("You are already registered for this event."))

        now = self._clock()
        record = self.get_record(event_id, user.user_id)
        if record is None:
            record = AttendanceRecord(event_id=event_id, user_id=user.user_id, registered_at=now, notes=notes)
            self._records.append(record)
        else:
            # cancelled record being reused
            record.status = AttendanceStatus.REGISTERED
            record.registered_at = now
            record.checked_in_at = None
            record.checked_out_at = None
            record.notes = notes
        record.user_name = user.username
        record.user_email = user.email
        self._commit("UserRegistered", record)
        return OperationResult.ok("Registered for event.", record=record)

    def check_in(self, event_id: int, notes: str | None = None) -> OperationResult:
        user_id = self._sessions.current.user.user_id
        record = self.get_record(event_id, user_id)
        if record is None:
            self.register(event_id, notes)
            record = self.get_record(event_id, user_id)

        if record.status == AttendanceStatus.PRESENT:
            return OperationResult.failed(InvalidStateError("You are already checked in."))

        record.status = AttendanceStatus.PRESENT
        record.checked_in_at = self._clock()
        record.notes = notes if notes is not None else record.notes
        self._commit("UserCheckedIn", record)
        return OperationResult.ok("Checked in.", record=record)

    def check_out(self, event_id: int, notes: str | None = None) -> OperationResult:
        try:
            record = self._require_record(event_id)
            if record.status != AttendanceStatus.PRESENT:
                raise InvalidStateError("You must be checked in to check out.")
        except DomainError as e:
            return OperationResult.failed(e)

        record.status = AttendanceStatus.CHECKED_OUT
        record.checked_out_at = self._clock()
        record.notes = notes if notes is not None else record.notes
        self._commit("UserCheckedOut", record)
        return OperationResult.ok("Checked out.", record=record)

    def cancel_registration(self, event_id: int) -> OperationResult:
        try:
            record = self._require_record(event_id)
            if record.status == AttendanceStatus.PRESENT:
                raise InvalidStateError("You cannot cancel while checked in.")
            if record.status == AttendanceStatus.CANCELLED:
                raise InvalidStateError("Registration is already cancelled.")
        except DomainError as e:
            return OperationResult.failed(e)

        record.status = AttendanceStatus.CANCELLED
        self._commit("RegistrationCancelled", record)
        return OperationResult.ok("Registration cancelled.", record=record)

    def mark_absent(self, event_id: int, user_id: str | None) -> OperationResult:
        """Administrative: mark a registered user who never showed up as absent."""
        try:
            record = self._require_record(event_id, user_id)
            if record.status != AttendanceStatus.REGISTERED:
                raise InvalidStateError("Only registered attendees can be marked absent.")
        except DomainError as e:
            return OperationResult.failed(e)

        record.status = AttendanceStatus.ABSENT
        self._commit("MarkedAbsent", record)
        return OperationResult.ok("Marked absent.", record=record)

    def clear(self) -> None:
        self._records = []
        try:
            self._repository.clear()
        except StorageError as e:
            logger.warning("attendance_clear_failed", error=e.message)

    def is_registered(self, event_id: int, user_id: str | None = None) -> bool:
        record = self.get_record(event_id, user_id)
        return record is not None and record.status != AttendanceStatus.CANCELLED

    def get_record(self, event_id: int, user_id: str | None = None) -> AttendanceRecord | None:
        user_id = self._resolve_user(user_id)
        return next((r for r in self._records if r.event_id == event_id and r.user_id == user_id), None)

    def get_status(self, event_id: int, user_id: str | None = None) -> AttendanceStatus:
        """Status of the record; users without one read as REGISTERED."""
        record = self.get_record(event_id, user_id)
        return record.status if record is not None else AttendanceStatus.REGISTERED

    def user_history(self, user_id: str | None = None) -> list[AttendanceRecord]:
        """Non-cancelled records for the user, newest registration first."""
        user_id = self._resolve_user(user_id)
        records = [r for r in self._records if r.user_id == user_id and r.status != AttendanceStatus.CANCELLED]
        return sorted(records, key=lambda r: r.registered_at, reverse=True)

    def user_attendance_history(self, user_id: str | None = None) -> UserAttendanceHistory:
        user_id = self._resolve_user(user_id)
        records = self.user_history(user_id)
        user_name = records[0].user_name if records else None
        return UserAttendanceHistory(user_id=user_id, user_name=user_name, records=records)

    def event_summary(self, event_id: int, event_name: str = "") -> EventAttendanceSummary:
        records = [r for r in self._records if r.event_id == event_id]
        return self._summarize(event_id, event_name, records)

    def all_events_summaries(self) -> list[EventAttendanceSummary]:
        by_event: dict[int, list[AttendanceRecord]] = defaultdict(list)
        for record in self._records:
            by_event[record.event_id].append(record)
        summaries = [
            self._summarize(event_id, f"Event {event_id}", records) for event_id, records in by_event.items()
        ]
        return sorted(summaries, key=lambda s: s.total_registered, reverse=True)

    def _summarize(self, event_id: int, event_name: str, records: list[AttendanceRecord]) -> EventAttendanceSummary:
        counts = defaultdict(int)
        for record in records:
            counts[record.status] += 1
        return EventAttendanceSummary(
            event_id=event_id,
            event_name=event_name,
            total_registered=len(records) - counts[AttendanceStatus.CANCELLED],
            total_present=counts[AttendanceStatus.PRESENT],
            total_absent=counts[AttendanceStatus.ABSENT],
            total_checked_out=counts[AttendanceStatus.CHECKED_OUT],
            attendees=list(records),
        )

    def _resolve_user(self, user_id: str | None) -> str | None:
        return user_id if user_id is not None else self._sessions.current.user.user_id

    def _require_record(self, event_id: int, user_id: str | None = None) -> AttendanceRecord:
        record = self.get_record(event_id, user_id)
        if record is None:
            raise AttendanceRecordNotFoundError()
        return record

    def _commit(self, action: str, record: AttendanceRecord) -> None:
        try:
            self._repository.save_all(self._records)
        except StorageError as e:
            logger.warning("attendance_save_failed", error=e.message, action=action)
        logger.info(
            "attendance_changed",
            action=action,
            event_id=record.event_id,
            user_id=record.user_id,
            status=record.status.value,
        )
        attendance_changed.send(sender=self, record=record, action=action)
