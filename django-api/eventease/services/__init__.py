from eventease.services.attendance_service import AttendanceTracker
from eventease.services.event_service import EventService
from eventease.services.expiry_monitor import SessionExpiryMonitor
from eventease.services.registration_service import RegistrationCoordinator
from eventease.services.session_service import SessionStore

__all__ = [
    "AttendanceTracker",
    "EventService",
    "RegistrationCoordinator",
    "SessionExpiryMonitor",
    "SessionStore",
]
