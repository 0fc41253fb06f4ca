"""
Event Command Repository Interface

Owns every write to the event record. Capacity counters change only through
compare_and_set_capacity, which the CapacityLedger drives.
"""

from abc import ABC, abstractmethod

from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.value_object.event_capacity import (
    CapacitySnapshot,
    EventCapacity,
)


class IEventCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, event: EventEntity) -> EventEntity:
        """
        Persist a new event

        Args:
            event: Event entity with id and initial capacity

        Returns:
            The stored event
        """
        pass

    @abstractmethod
    async def get_capacity(self, *, event_id: str) -> CapacitySnapshot | None:
        """
        Read the capacity counters together with the record version

        Args:
            event_id: Event ID

        Returns:
            Snapshot or None if the event does not exist
        """
        pass

    @abstractmethod
    async def compare_and_set_capacity(
        self, *, event_id: str, expected_version: int, capacity: EventCapacity
    ) -> bool:
        """
        Write capacity only if the stored version still equals expected_version.
        A successful write bumps the version by one.

        Args:
            event_id: Event ID
            expected_version: Version the caller read the capacity at
            capacity: New counters

        Returns:
            True if written, False if another writer got there first
        """
        pass

    @abstractmethod
    async def delete(self, *, event_id: str) -> bool:
        """
        Delete an event that no registration references

        Raises:
            EventHasRegistrationsError: registrations still reference the event

        Returns:
            True if a record was removed
        """
        pass
