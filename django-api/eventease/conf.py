from datetime import timedelta

from django.conf import settings

SESSION_TIMEOUT: timedelta = getattr(settings, "EVENTEASE_SESSION_TIMEOUT", timedelta(minutes=30))
EXPIRY_CHECK_INTERVAL: timedelta = getattr(settings, "EVENTEASE_EXPIRY_CHECK_INTERVAL", timedelta(minutes=1))
NAVIGATION_HISTORY_LIMIT: int = getattr(settings, "EVENTEASE_NAVIGATION_HISTORY_LIMIT", 10)

MIN_ATTENDEES: int = getattr(settings, "EVENTEASE_MIN_ATTENDEES", 1)
MAX_ATTENDEES: int = getattr(settings, "EVENTEASE_MAX_ATTENDEES", 10)

STORAGE_CACHE_ALIAS: str = getattr(settings, "EVENTEASE_STORAGE_CACHE_ALIAS", "default")

SESSION_STORAGE_KEY = "eventease_user_session"
ATTENDANCE_STORAGE_KEY = "eventease_attendance_records"
REGISTRATION_STORAGE_KEY = "eventease_registrations"
