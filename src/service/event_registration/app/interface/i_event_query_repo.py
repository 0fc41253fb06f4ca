from abc import ABC, abstractmethod
from typing import List

from src.service.event_registration.domain.entity.event_entity import EventEntity


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: str) -> EventEntity | None:
        pass

    @abstractmethod
    async def list_events(self) -> List[EventEntity]:
        """Newest first."""
        pass
