"""
In-memory document store

Process-local stand-in for the document database, used for single-instance
deployments, local development and tests. Each public call starts with an
event-loop checkpoint, so concurrent requests interleave at every store call
exactly as they would around network I/O. Everything after the checkpoint
runs without awaiting, which makes each compare-and-set and each
check-and-insert atomic with respect to other tasks.
"""

from typing import Iterable, List, Optional

import anyio
import attrs

from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.domain.registration_error import (
    DuplicateRegistrationError,
    EventHasRegistrationsError,
    EventNotFoundError,
)
from src.service.event_registration.domain.value_object.event_capacity import (
    CapacitySnapshot,
    EventCapacity,
)


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self._events: dict[str, EventEntity] = {}
        self._registrations: dict[str, Registration] = {}
        self._email_index: dict[tuple[str, str], str] = {}  # (event_id, email) -> registration id
        self._invitation_codes: set[str] = set()

    @staticmethod
    async def _io() -> None:
        await anyio.lowlevel.checkpoint()

    def seed(
        self, *, events: Iterable[EventEntity], registrations: Iterable[Registration] = ()
    ) -> None:
        """Load documents synchronously, bypassing capacity accounting."""
        for event in events:
            self._events[event.id] = event
        for registration in registrations:
            self._put_registration(registration)

    def reset(self) -> None:
        self._events.clear()
        self._registrations.clear()
        self._email_index.clear()
        self._invitation_codes.clear()

    # ---------- events ----------

    async def insert_event(self, *, event: EventEntity) -> EventEntity:
        await self._io()
        if event.id in self._events:
            raise ValueError(f'Event {event.id} already exists')
        self._events[event.id] = event
        return event

    async def get_event(self, *, event_id: str) -> Optional[EventEntity]:
        await self._io()
        return self._events.get(event_id)

    async def list_events(self) -> List[EventEntity]:
        await self._io()
        return sorted(
            self._events.values(),
            key=lambda e: (e.created_at is not None, e.created_at, e.id),
            reverse=True,
        )

    async def get_capacity(self, *, event_id: str) -> Optional[CapacitySnapshot]:
        await self._io()
        event = self._events.get(event_id)
        if event is None:
            return None
        return CapacitySnapshot(capacity=event.capacity, version=event.version)

    async def compare_and_set_capacity(
        self, *, event_id: str, expected_version: int, capacity: EventCapacity
    ) -> bool:
        await self._io()
        event = self._events.get(event_id)
        if event is None or event.version != expected_version:
            return False
        self._events[event_id] = attrs.evolve(
            event, capacity=capacity, version=event.version + 1
        )
        return True

    async def delete_event(self, *, event_id: str) -> bool:
        await self._io()
        if event_id not in self._events:
            return False
        if any(key[0] == event_id for key in self._email_index):
            raise EventHasRegistrationsError()
        del self._events[event_id]
        return True

    # ---------- registrations ----------

    def _put_registration(self, registration: Registration) -> None:
        key = (registration.event_id, registration.attendee_email)
        if key in self._email_index:
            raise DuplicateRegistrationError()
        if registration.invitation_code in self._invitation_codes:
            raise ValueError(f'Invitation code {registration.invitation_code} already used')
        self._registrations[registration.id] = registration
        self._email_index[key] = registration.id
        self._invitation_codes.add(registration.invitation_code)

    async def get_registration(self, *, registration_id: str) -> Optional[Registration]:
        await self._io()
        return self._registrations.get(registration_id)

    async def find_registration(self, *, event_id: str, email: str) -> Optional[Registration]:
        await self._io()
        registration_id = self._email_index.get((event_id, email))
        return self._registrations.get(registration_id) if registration_id else None

    async def insert_registration(self, *, registration: Registration) -> str:
        await self._io()
        if registration.event_id not in self._events:
            raise EventNotFoundError()
        self._put_registration(registration)
        return registration.id

    async def compare_and_set_registration_status(
        self,
        *,
        registration_id: str,
        expected_status: RegistrationStatus,
        registration: Registration,
    ) -> bool:
        await self._io()
        current = self._registrations.get(registration_id)
        if current is None or current.status != expected_status:
            return False
        self._registrations[registration_id] = attrs.evolve(
            current,
            status=registration.status,
            rejection_reason=registration.rejection_reason,
            updated_at=registration.updated_at,
        )
        return True

    async def delete_registration(self, *, registration_id: str) -> Optional[Registration]:
        await self._io()
        registration = self._registrations.pop(registration_id, None)
        if registration is None:
            return None
        self._email_index.pop((registration.event_id, registration.attendee_email), None)
        self._invitation_codes.discard(registration.invitation_code)
        return registration

    async def list_registrations(
        self,
        *,
        event_id: Optional[str] = None,
        status: Optional[RegistrationStatus] = None,
    ) -> List[Registration]:
        await self._io()
        matches = [
            r
            for r in self._registrations.values()
            if (not event_id or r.event_id == event_id) and (not status or r.status == status)
        ]
        return sorted(matches, key=lambda r: (r.registration_date, r.id), reverse=True)

    async def count_registrations(
        self, *, event_id: str, statuses: Optional[frozenset[RegistrationStatus]] = None
    ) -> int:
        await self._io()
        return sum(
            1
            for r in self._registrations.values()
            if r.event_id == event_id and (not statuses or r.status in statuses)
        )
