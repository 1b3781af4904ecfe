"""Domain error codes for registration, attendance and session handling."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"
    ATTENDANCE_RECORD_NOT_FOUND = "ATTENDANCE_RECORD_NOT_FOUND"
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"
    DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"
    INVALID_STATE = "INVALID_STATE"
    STORAGE_FAILURE = "STORAGE_FAILURE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class FieldValidationError(DomainError):
    """Raised when submitted fields are invalid.

    All field errors are aggregated into a single message.
    """

    def __init__(self, messages: list[str]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=" ".join(messages),
        )


class NotFoundError(DomainError):
    """Base class for lookups that found nothing."""


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found.",
        )


class RegistrationNotFoundError(NotFoundError):
    """Raised when a registration id is unknown."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_FOUND,
            message="Registration not found.",
        )


class AttendanceRecordNotFoundError(NotFoundError):
    """Raised when no attendance record exists for an event and user."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ATTENDANCE_RECORD_NOT_FOUND,
            message="You are not registered for this event.",
        )


class CapacityError(DomainError):
    """Raised when fewer seats remain than requested, but some do remain."""

    def __init__(self, available: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_CAPACITY,
            message=(
                f"Only {available} seats available. "
                "Please reduce the number of attendees."
            ),
        )


class DuplicateRegistrationError(DomainError):
    """Raised when the email already holds an active registration for the event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_REGISTRATION,
            message="A registration with this email address already exists for this event.",
        )


class InvalidStateError(DomainError):
    """Raised for a transition the current status does not allow."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_STATE, message=message)


class StorageError(DomainError):
    """Raised by storage adapters when durable reads or writes fail."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.STORAGE_FAILURE,
            message=f"Storage operation failed for '{key}': {reason}",
        )
