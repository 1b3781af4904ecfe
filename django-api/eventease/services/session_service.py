"""Session service - the single active user session and its expiry.

Every tracked activity stamps ``last_activity``, persists the whole session
and then sends ``session_changed``. A session idle for ``SESSION_TIMEOUT`` is
discarded and replaced with a fresh one, either by ``check_expiry`` (driven
by ``SessionExpiryMonitor`` or called directly) or on the next read of
``current``. Callers should re-read ``current`` rather than hold on to a
session object, since it may be replaced between calls.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

import structlog
from django.utils import timezone
from pydantic import TypeAdapter, ValidationError

from eventease import conf
from eventease.domain import SearchCriteria, UserInfo, UserPreferences, UserSession
from eventease.domain.errors import FieldValidationError, StorageError
from eventease.domain.models import OperationResult
from eventease.signals import session_changed, session_expired, session_started, user_authenticated
from eventease.stores.interfaces import SessionRepository

logger = structlog.get_logger(__name__)

# Normalized preference key -> (UserPreferences attribute, type)
PREFERENCE_FIELDS: dict[str, tuple[str, type]] = {
    "theme": ("theme", str),
    "language": ("language", str),
    "enablenotifications": ("enable_notifications", bool),
    "pagesize": ("page_size", int),
}


def _normalize_key(key: str) -> str:
    return key.lower().replace("_", "").replace("-", "")


class SessionStore:
    """Owns the active UserSession and persists it through a SessionRepository."""

    def __init__(
        self,
        repository: SessionRepository,
        clock: Callable[[], datetime] = timezone.now,
        timeout: timedelta | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self.timeout = timeout or conf.SESSION_TIMEOUT
        self._session = UserSession.start(clock())

    @property
    def current(self) -> UserSession:
        """The active session, replaced first if it has expired."""
        self.check_expiry()
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self.current.user.is_authenticated

    @property
    def session_id(self) -> str:
        return self.current.session_id

    def initialize(self) -> UserSession:
        """Adopt the persisted session if it is still live, otherwise start a new one."""
        now = self._clock()
        try:
            stored = self._repository.load()
        except StorageError as e:
            logger.warning("session_load_failed", error=e.message)
            stored = None

        if stored is not None and not stored.is_expired(self.timeout, now):
            stored.touch(now)
            self._session = stored
            self._persist()
            logger.info("session_restored", session_id=stored.session_id)
            return self._session

        return self.start_new_session()

    def start_new_session(self) -> UserSession:
        old_session = self._session
        self._session = UserSession.start(self._clock())
        self._persist()
        logger.info("session_started", session_id=self._session.session_id)
        session_started.send(sender=self, session=self._session)
        self._changed("SessionStarted", old_session, self._session)
        return self._session

    def clear_session(self) -> UserSession:
        old_session = self._session
        try:
            self._repository.clear()
        except StorageError as e:
            logger.warning("session_clear_failed", error=e.message)
        self.start_new_session()
        self._changed("SessionCleared", old_session, self._session)
        return self._session

    def check_expiry(self, now: datetime | None = None) -> bool:
        """Replace the session if it has been idle past the timeout.

        Returns True when the session expired.
        """
        now = now or self._clock()
        if not self._session.is_expired(self.timeout, now):
            return False
        expired = self._session
        logger.info("session_expired", session_id=expired.session_id, last_activity=expired.last_activity.isoformat())
        # Receivers may read ``current``; the replacement must already be in place.
        self.start_new_session()
        session_expired.send(sender=self, session=expired)
        return True

    def update_activity(self) -> None:
        self.current.touch(self._clock())
        self._persist()

    def login(self, user_id: str, username: str, email: str | None = None, roles: list[str] | None = None) -> None:
        session = self.current
        old_user = session.user
        now = self._clock()
        session.user = UserInfo(
            user_id=user_id,
            username=username,
            email=email,
            is_authenticated=True,
            roles=list(roles or []),
            last_login=now,
        )
        session.touch(now)
        self._persist()
        logger.info("user_logged_in", session_id=session.session_id, user_id=user_id)
        user_authenticated.send(sender=self, session=session)
        self._changed("UserLogin", old_user, session.user)

    def logout(self) -> None:
        session = self.current
        old_user = session.user
        session.user = UserInfo()
        session.touch(self._clock())
        self._persist()
        logger.info("user_logged_out", session_id=session.session_id, user_id=old_user.user_id)
        self._changed("UserLogout", old_user, session.user)

    def update_preferences(self, preferences: UserPreferences) -> None:
        session = self.current
        old_preferences = session.preferences
        session.preferences = preferences
        self._touch_and_persist(session)
        self._changed("PreferencesUpdated", old_preferences, preferences)

    def update_preference(self, key: str, value: Any) -> OperationResult:
        """Set one preference.

        Known keys are coerced to their field type; anything else is kept in
        ``custom_settings``. A value that cannot be coerced leaves the
        preferences untouched and returns a failed result.
        """
        session = self.current
        preferences = session.preferences
        known = PREFERENCE_FIELDS.get(_normalize_key(key))
        if known is None:
            old_value = preferences.custom_settings.get(key)
            preferences.custom_settings[key] = value
            new_value = value
        else:
            attribute, field_type = known
            try:
                new_value = TypeAdapter(field_type).validate_python(value)
            except ValidationError:
                error = FieldValidationError([f"Invalid value for preference '{key}'."])
                logger.info("preference_rejected", key=key, value=repr(value))
                return OperationResult.failed(error)
            old_value = getattr(preferences, attribute)
            setattr(preferences, attribute, new_value)

        self._touch_and_persist(session)
        self._changed(f"Preference_{key}", old_value, new_value)
        return OperationResult.ok("Preference updated.")

    def update_state(self, key: str, value: Any) -> None:
        session = self.current
        old_value = session.state.component_states.get(key)
        session.state.component_states[key] = value
        self._touch_and_persist(session)
        self._changed(f"State_{key}", old_value, value)

    def get_state(self, key: str, default: Any = None, as_type: Any = None) -> Any:
        """Read a component state value, coerced to ``as_type`` when given.

        Values restored from storage come back as plain JSON structures, so a
        stored dataclass arrives as a dict and is rebuilt here. Returns
        ``default`` when the key is missing or coercion fails.
        """
        states = self.current.state.component_states
        if key not in states:
            return default
        value = states[key]
        if as_type is None:
            return value
        try:
            return TypeAdapter(as_type).validate_python(value)
        except ValidationError:
            logger.debug("state_coercion_failed", key=key, as_type=repr(as_type))
            return default

    def track_page_visit(self, page: str) -> None:
        session = self.current
        old_page = session.state.current_page
        session.state.current_page = page
        session.add_to_navigation_history(page, conf.NAVIGATION_HISTORY_LIMIT)
        self._touch_and_persist(session)
        self._changed("PageVisit", old_page, page)

    def track_event_view(self, event_id: int) -> None:
        session = self.current
        if event_id in session.state.viewed_event_ids:
            return
        session.state.viewed_event_ids.append(event_id)
        self._touch_and_persist(session)
        self._changed("EventViewed", None, event_id)

    def toggle_bookmark(self, event_id: int) -> bool:
        """Flip bookmark membership. Returns True when the event is now bookmarked."""
        session = self.current
        bookmarks = session.state.bookmarked_event_ids
        was_bookmarked = event_id in bookmarks
        if was_bookmarked:
            bookmarks.remove(event_id)
        else:
            bookmarks.append(event_id)
        self._touch_and_persist(session)
        self._changed("BookmarkToggled", was_bookmarked, not was_bookmarked)
        return not was_bookmarked

    def set_last_search(self, criteria: SearchCriteria) -> None:
        session = self.current
        old_search = session.state.last_search
        session.state.last_search = criteria
        self._touch_and_persist(session)
        self._changed("LastSearchUpdated", old_search, criteria)

    def _touch_and_persist(self, session: UserSession) -> None:
        session.touch(self._clock())
        self._persist()

    def _persist(self) -> None:
        try:
            self._repository.save(self._session)
        except StorageError as e:
            logger.warning("session_save_failed", session_id=self._session.session_id, error=e.message)

    def _changed(self, change_type: str, old_value: Any, new_value: Any) -> None:
        session_changed.send(
            sender=self,
            session=self._session,
            change_type=change_type,
            old_value=old_value,
            new_value=new_value,
        )
