from enum import StrEnum


class RegistrationStatus(StrEnum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    CANCELLED = 'cancelled'

    @property
    def holds_seat(self) -> bool:
        """Pending and approved registrations each consume one reserved seat."""
        return self in (RegistrationStatus.PENDING, RegistrationStatus.APPROVED)

    @property
    def is_terminal(self) -> bool:
        return self in (RegistrationStatus.REJECTED, RegistrationStatus.CANCELLED)


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    PAID = 'paid'
