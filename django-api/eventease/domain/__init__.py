from eventease.domain.models import (
    AttendanceRecord,
    AttendanceStatus,
    Event,
    EventAttendanceSummary,
    OperationResult,
    Registration,
    RegistrationStatistics,
    RegistrationStatus,
    SearchCriteria,
    SessionState,
    UserAttendanceHistory,
    UserInfo,
    UserPreferences,
    UserSession,
)
from eventease.domain.value_objects import Capacity, Money

__all__ = [
    "AttendanceRecord",
    "AttendanceStatus",
    "Event",
    "EventAttendanceSummary",
    "OperationResult",
    "Registration",
    "RegistrationStatistics",
    "RegistrationStatus",
    "SearchCriteria",
    "SessionState",
    "UserAttendanceHistory",
    "UserInfo",
    "UserPreferences",
    "UserSession",
    "Money",
    "Capacity",
]
