"""Registration service - seat allocation, waitlisting and cancellation.

Capacity is only ever consumed by CONFIRMED registrations. A registration
that does not fit is waitlisted when the event is full and rejected when a
smaller party would still fit. Cancelling never promotes waitlisted
registrations; freed seats are picked up by the next submission.
"""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import asdict
from datetime import datetime

import structlog
from django.utils import timezone

from eventease.domain import (
    Event,
    OperationResult,
    Registration,
    RegistrationStatistics,
    RegistrationStatus,
)
from eventease.domain.errors import (
    CapacityError,
    DomainError,
    DuplicateRegistrationError,
    FieldValidationError,
    InvalidStateError,
    RegistrationNotFoundError,
    StorageError,
)
from eventease.serializers import RegistrationSerializer
from eventease.services.event_service import EventService
from eventease.signals import registration_changed
from eventease.stores.interfaces import RegistrationRepository
from eventease.stores.memory_store import InMemoryRegistrationRepository

logger = structlog.get_logger(__name__)

# Assigned by the coordinator, never taken from the submitted form.
_SERVER_FIELDS = ("registration_id", "registration_date", "status")


class RegistrationCoordinator:
    """Allocates event capacity among submitted registrations."""

    def __init__(
        self,
        events: EventService,
        repository: RegistrationRepository | None = None,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._events = events
        self._repository = repository or InMemoryRegistrationRepository()
        self._clock = clock
        self._registrations = self._load()
        self._next_id = max((r.registration_id or 0 for r in self._registrations), default=0) + 1

    def submit_registration(self, registration: Registration) -> OperationResult:
        """Validate a registration and confirm, waitlist or reject it."""
        try:
            accepted = self._validate(registration)
            self._ensure_not_duplicate(accepted)
            event = self._events.get_event(accepted.event_id)
            status = self._resolve_status(event, accepted.number_of_attendees)
        except DomainError as e:
            logger.info(
                "registration_rejected",
                event_id=registration.event_id,
                code=e.code.value,
                reason=e.message,
            )
            return OperationResult.failed(e)
        return self._accept(accepted, event, status)

    def cancel_registration(self, registration_id: int) -> OperationResult:
        try:
            registration = self._get_or_raise(registration_id)
            if registration.status == RegistrationStatus.CANCELLED:
                raise InvalidStateError("Registration is already cancelled.")
        except DomainError as e:
            return OperationResult.failed(e)

        registration.status = RegistrationStatus.CANCELLED
        self._persist()
        logger.info("registration_cancelled", registration_id=registration_id, event_id=registration.event_id)
        registration_changed.send(sender=self, registration=registration, action="RegistrationCancelled")
        return OperationResult.ok("Registration cancelled successfully.", registration_id=registration_id)

    def statistics(self, event_id: int) -> RegistrationStatistics:
        registrations = self.registrations_for_event(event_id)
        counts = defaultdict(int)
        for registration in registrations:
            counts[registration.status] += 1
        return RegistrationStatistics(
            event_id=event_id,
            total_registrations=len(registrations),
            confirmed_registrations=counts[RegistrationStatus.CONFIRMED],
            waitlist_registrations=counts[RegistrationStatus.WAITLIST],
            cancelled_registrations=counts[RegistrationStatus.CANCELLED],
            total_attendees=self._confirmed_attendees(event_id),
        )

    def get_registration(self, registration_id: int) -> Registration | None:
        return next((r for r in self._registrations if r.registration_id == registration_id), None)

    def registrations_for_event(self, event_id: int) -> list[Registration]:
        return [r for r in self._registrations if r.event_id == event_id]

    def registrations_for_email(self, email: str) -> list[Registration]:
        return [r for r in self._registrations if r.email.lower() == email.lower()]

    def remaining_capacity(self, event_id: int) -> int | None:
        """Seats still available to confirmed registrations, or None for unknown events."""
        try:
            event = self._events.get_event(event_id)
        except DomainError:
            return None
        return event.capacity.remaining(self._confirmed_attendees(event_id))

    def _validate(self, registration: Registration) -> Registration:
        data = {k: v for k, v in asdict(registration).items() if k not in _SERVER_FIELDS}
        serializer = RegistrationSerializer(data=data)
        if not serializer.is_valid():
            errors = serializer.errors
            messages = [str(message) for name in serializer.fields if name in errors for message in errors[name]]
            raise FieldValidationError(messages)
        return serializer.save()

    def _ensure_not_duplicate(self, registration: Registration) -> None:
        email = registration.email.lower()
        for existing in self.registrations_for_event(registration.event_id):
            if existing.is_active and existing.email.lower() == email:
                raise DuplicateRegistrationError()

    def _confirmed_attendees(self, event_id: int) -> int:
        return sum(
            r.number_of_attendees
            for r in self.registrations_for_event(event_id)
            if r.status == RegistrationStatus.CONFIRMED
        )

    def _resolve_status(self, event: Event, requested: int) -> RegistrationStatus:
        available = event.capacity.remaining(self._confirmed_attendees(event.id))
        if requested <= available:
            return RegistrationStatus.CONFIRMED
        if available > 0:
            raise CapacityError(available)
        return RegistrationStatus.WAITLIST

    def _accept(self, registration: Registration, event: Event, status: RegistrationStatus) -> OperationResult:
        registration.registration_id = self._next_id
        self._next_id += 1
        registration.registration_date = self._clock()
        registration.status = status
        self._registrations.append(registration)
        self._persist()

        if status == RegistrationStatus.WAITLIST:
            action = "RegistrationWaitlisted"
            message = (
                f"You have been added to the waitlist for {event.name}. "
                "We'll notify you if spots become available."
            )
        else:
            action = "RegistrationConfirmed"
            message = (
                f"Registration confirmed for {event.name}! "
                f"Confirmation details have been sent to {registration.email}."
            )

        logger.info(
            "registration_accepted",
            registration_id=registration.registration_id,
            event_id=event.id,
            status=status.value,
            attendees=registration.number_of_attendees,
        )
        registration_changed.send(sender=self, registration=registration, action=action)
        return OperationResult.ok(message, registration_id=registration.registration_id)

    def _get_or_raise(self, registration_id: int) -> Registration:
        registration = self.get_registration(registration_id)
        if registration is None:
            raise RegistrationNotFoundError()
        return registration

    def _load(self) -> list[Registration]:
        try:
            return self._repository.load_all()
        except StorageError as e:
            logger.warning("registrations_load_failed", error=e.message)
            return []

    def _persist(self) -> None:
        try:
            self._repository.save_all(self._registrations)
        except StorageError as e:
            logger.warning("registrations_save_failed", error=e.message)
