"""
Error taxonomy for capacity accounting and the registration workflow.

Every error maps to an HTTP status through the platform CustomBaseError
handlers; the messages are the ones shown to API clients.
"""

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
)


class ValidationError(DomainError):
    def __init__(
        self, message: str = 'Missing required fields: eventId, attendeeInfo.email'
    ) -> None:
        super().__init__(message, 400)


class InvalidStatusError(DomainError):
    def __init__(
        self, message: str = 'Invalid status. Must be approved, rejected, or cancelled'
    ) -> None:
        super().__init__(message, 400)


class DuplicateRegistrationError(DomainError):
    def __init__(self, message: str = 'User already registered for this event') -> None:
        super().__init__(message, 400)


class EventFullError(DomainError):
    def __init__(self, message: str = 'Event is full') -> None:
        super().__init__(message, 400)


class CapacityBelowReservedError(DomainError):
    def __init__(self, *, total: int, reserved: int) -> None:
        super().__init__(
            f'Capacity total {total} is below the {reserved} seats already reserved', 400
        )


class EventHasRegistrationsError(DomainError):
    def __init__(self, message: str = 'Cannot delete event with existing registrations') -> None:
        super().__init__(message, 400)


class EventNotFoundError(NotFoundError):
    def __init__(self, message: str = 'Event not found') -> None:
        super().__init__(message)


class RegistrationNotFoundError(NotFoundError):
    def __init__(self, message: str = 'Registration not found') -> None:
        super().__init__(message)


class InvalidTransitionError(ConflictError):
    def __init__(self, *, current: str, requested: str) -> None:
        super().__init__(f'Cannot change registration status from {current} to {requested}')
        self.current = current
        self.requested = requested


class InvalidStatusFilterError(DomainError):
    def __init__(
        self,
        message: str = (
            'Invalid status filter. Must be all, pending, approved, rejected, or cancelled'
        ),
    ) -> None:
        super().__init__(message, 400)


class CapacityConflictError(InternalError):
    """Optimistic-concurrency retry budget exhausted."""

    def __init__(self, *, event_id: str, attempts: int) -> None:
        super().__init__(f'Capacity update for event {event_id} lost {attempts} consecutive races')


class StoreUnavailableError(ServiceUnavailableError):
    def __init__(
        self, message: str = 'Data store is unavailable; running in read-only fixture mode'
    ) -> None:
        super().__init__(message)


class ConcurrentModificationError(ConflictError):
    def __init__(
        self, message: str = 'Registration was modified concurrently, please retry'
    ) -> None:
        super().__init__(message)
