"""
Registration Command Repository Interface

Stores must enforce uniqueness of (event_id, attendee email) themselves:
find_by_event_and_email is only a fast path, insert is the arbiter.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus


class IRegistrationCommandRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, registration_id: str) -> Registration | None:
        pass

    @abstractmethod
    async def find_by_event_and_email(self, *, event_id: str, email: str) -> Registration | None:
        """
        Args:
            event_id: Event ID
            email: Normalized attendee email

        Returns:
            Any registration for the pair regardless of status, or None
        """
        pass

    @abstractmethod
    async def insert(self, *, registration: Registration) -> str:
        """
        Insert a new registration

        Raises:
            DuplicateRegistrationError: (event_id, email) already registered

        Returns:
            Registration ID
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        *,
        registration_id: str,
        expected_status: RegistrationStatus,
        registration: Registration,
    ) -> bool:
        """
        Write status, rejection reason and updated_at only if the stored status
        still equals expected_status

        Returns:
            True if written, False if the status changed concurrently or the
            registration is gone
        """
        pass

    @abstractmethod
    async def delete(self, *, registration_id: str) -> Optional[Registration]:
        """
        Remove a registration

        Returns:
            The removed registration as it was at deletion time, or None if no
            row was removed (already deleted by a concurrent caller)
        """
        pass
