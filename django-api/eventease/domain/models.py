"""Domain models representing persisted state.

These are pure domain objects with no storage or input rules.
The ORM model backing the event catalog is in eventease/models.py, JSON
encoding lives in eventease/serializers.py.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from eventease.domain.errors import DomainError, ErrorCode
from eventease.domain.value_objects import Capacity, Money


@dataclass(frozen=True)
class Event:
    """Domain representation of a catalog event. Read-only to the core."""

    id: int
    name: str
    capacity: Capacity
    price: Money
    category: str = ""
    location: str = ""
    date: datetime | None = None
    description: str = ""
    organizer: str = ""


class RegistrationStatus(StrEnum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    WAITLIST = "WaitList"


@dataclass
class Registration:
    """A sign-up for an event, possibly covering several attendees."""

    event_id: int
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    company: str = ""
    job_title: str = ""
    number_of_attendees: int = 1
    special_requirements: str = ""
    comments: str = ""
    agree_to_terms: bool = False
    subscribe_to_newsletter: bool = False
    registration_id: int | None = None
    registration_date: datetime | None = None
    status: RegistrationStatus = RegistrationStatus.PENDING

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.status != RegistrationStatus.CANCELLED

    def total_cost(self, price: Money) -> Money:
        return price * self.number_of_attendees


@dataclass(frozen=True)
class RegistrationStatistics:
    event_id: int
    total_registrations: int = 0
    confirmed_registrations: int = 0
    waitlist_registrations: int = 0
    cancelled_registrations: int = 0
    total_attendees: int = 0


class AttendanceStatus(StrEnum):
    REGISTERED = "Registered"
    PRESENT = "Present"
    CHECKED_OUT = "CheckedOut"
    ABSENT = "Absent"
    CANCELLED = "Cancelled"


@dataclass
class AttendanceRecord:
    """Attendance of one user at one event.

    The user fields are a snapshot of the session identity taken when the
    record was created.
    """

    event_id: int
    user_id: str | None
    registered_at: datetime
    user_name: str | None = None
    user_email: str | None = None
    status: AttendanceStatus = AttendanceStatus.REGISTERED
    checked_in_at: datetime | None = None
    checked_out_at: datetime | None = None
    notes: str | None = None
    attendance_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def duration(self) -> timedelta | None:
        if self.checked_in_at is None or self.checked_out_at is None:
            return None
        return self.checked_out_at - self.checked_in_at

    @property
    def is_present(self) -> bool:
        return self.status in (AttendanceStatus.PRESENT, AttendanceStatus.CHECKED_OUT)


@dataclass
class EventAttendanceSummary:
    event_id: int
    event_name: str = ""
    total_registered: int = 0
    total_present: int = 0
    total_absent: int = 0
    total_checked_out: int = 0
    attendees: list[AttendanceRecord] = field(default_factory=list)

    @property
    def attendance_rate(self) -> float:
        """Percentage of non-cancelled registrations that turned up."""
        if self.total_registered == 0:
            return 0.0
        return (self.total_present + self.total_checked_out) / self.total_registered * 100


@dataclass
class UserAttendanceHistory:
    user_id: str | None
    user_name: str | None = None
    records: list[AttendanceRecord] = field(default_factory=list)

    @property
    def total_events_attended(self) -> int:
        return sum(1 for record in self.records if record.is_present)

    @property
    def total_events_registered(self) -> int:
        return len(self.records)

    @property
    def attendance_rate(self) -> float:
        if not self.records:
            return 0.0
        return self.total_events_attended / self.total_events_registered * 100


@dataclass
class SearchCriteria:
    event_name: str = ""
    location: str = ""
    category: str = ""
    date: datetime | None = None


@dataclass
class UserInfo:
    user_id: str | None = None
    username: str | None = None
    email: str | None = None
    is_authenticated: bool = False
    roles: list[str] = field(default_factory=list)
    last_login: datetime | None = None


@dataclass
class UserPreferences:
    theme: str = "light"
    language: str = "en"
    time_zone: str = "UTC"
    enable_notifications: bool = True
    default_event_view: str = "grid"
    page_size: int = 10
    favorite_categories: list[str] = field(default_factory=list)
    custom_settings: dict[str, Any] = field(default_factory=dict)


@dataclass
class SessionState:
    current_page: str | None = None
    last_search: SearchCriteria | None = None
    viewed_event_ids: list[int] = field(default_factory=list)
    bookmarked_event_ids: list[int] = field(default_factory=list)
    component_states: dict[str, Any] = field(default_factory=dict)
    last_selected_category: str | None = None
    current_event_id: int | None = None
    has_unsaved_changes: bool = False


@dataclass
class UserSession:
    """Identity, preferences and navigation state carried across page loads."""

    session_start_time: datetime
    last_activity: datetime
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    user: UserInfo = field(default_factory=UserInfo)
    preferences: UserPreferences = field(default_factory=UserPreferences)
    state: SessionState = field(default_factory=SessionState)
    navigation_history: list[str] = field(default_factory=list)
    custom_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def start(cls, now: datetime) -> "UserSession":
        return cls(session_start_time=now, last_activity=now)

    def duration(self, now: datetime) -> timedelta:
        return now - self.session_start_time

    def is_expired(self, timeout: timedelta, now: datetime) -> bool:
        return now - self.last_activity >= timeout

    def touch(self, now: datetime) -> None:
        self.last_activity = now

    def add_to_navigation_history(self, page: str, limit: int) -> None:
        self.navigation_history.insert(0, page)
        del self.navigation_history[limit:]


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a mutating call. Truthy when the call succeeded.

    Failures carry the error code of the domain error that caused them.
    """

    success: bool
    message: str
    registration_id: int | None = None
    record: AttendanceRecord | None = None
    error_code: ErrorCode | None = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(
        cls,
        message: str,
        registration_id: int | None = None,
        record: AttendanceRecord | None = None,
    ) -> "OperationResult":
        return cls(success=True, message=message, registration_id=registration_id, record=record)

    @classmethod
    def failed(cls, error: DomainError) -> "OperationResult":
        return cls(success=False, message=error.message, error_code=error.code)
