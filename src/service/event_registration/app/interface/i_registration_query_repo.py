from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus


class IRegistrationQueryRepo(ABC):
    @abstractmethod
    async def list_registrations(
        self,
        *,
        event_id: Optional[str] = None,
        status: Optional[RegistrationStatus] = None,
    ) -> List[Registration]:
        """
        List registrations, optionally filtered

        Args:
            event_id: Only registrations of this event
            status: Only registrations in this status

        Returns:
            Registrations sorted by registration_date, newest first
        """
        pass

    @abstractmethod
    async def count_by_event(
        self, *, event_id: str, statuses: Optional[frozenset[RegistrationStatus]] = None
    ) -> int:
        pass
