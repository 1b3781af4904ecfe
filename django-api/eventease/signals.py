"""Change notifications for registration, attendance and session state.

Every signal is sent synchronously, after the triggering change has been
persisted. Receivers get the sending service as ``sender``.
"""

from django.dispatch import Signal

# registration, action
registration_changed = Signal()

# record, action
attendance_changed = Signal()

# session, change_type, old_value, new_value
session_changed = Signal()

# session
session_expired = Signal()
session_started = Signal()
user_authenticated = Signal()
