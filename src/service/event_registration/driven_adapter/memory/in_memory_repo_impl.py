from typing import List, Optional

from src.platform.logging.loguru_io import Logger
from src.service.event_registration.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_registration.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_registration.app.interface.i_registration_command_repo import (
    IRegistrationCommandRepo,
)
from src.service.event_registration.app.interface.i_registration_query_repo import (
    IRegistrationQueryRepo,
)
from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.domain.value_object.event_capacity import (
    CapacitySnapshot,
    EventCapacity,
)
from src.service.event_registration.driven_adapter.memory.in_memory_document_store import (
    InMemoryDocumentStore,
)


class InMemoryEventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, *, store: InMemoryDocumentStore) -> None:
        self.store = store

    @Logger.io
    async def create(self, *, event: EventEntity) -> EventEntity:
        return await self.store.insert_event(event=event)

    @Logger.io
    async def get_capacity(self, *, event_id: str) -> CapacitySnapshot | None:
        return await self.store.get_capacity(event_id=event_id)

    @Logger.io
    async def compare_and_set_capacity(
        self, *, event_id: str, expected_version: int, capacity: EventCapacity
    ) -> bool:
        return await self.store.compare_and_set_capacity(
            event_id=event_id, expected_version=expected_version, capacity=capacity
        )

    @Logger.io
    async def delete(self, *, event_id: str) -> bool:
        return await self.store.delete_event(event_id=event_id)


class InMemoryEventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, *, store: InMemoryDocumentStore) -> None:
        self.store = store

    @Logger.io
    async def get_by_id(self, *, event_id: str) -> EventEntity | None:
        return await self.store.get_event(event_id=event_id)

    @Logger.io
    async def list_events(self) -> List[EventEntity]:
        return await self.store.list_events()


class InMemoryRegistrationCommandRepoImpl(IRegistrationCommandRepo):
    def __init__(self, *, store: InMemoryDocumentStore) -> None:
        self.store = store

    @Logger.io
    async def get_by_id(self, *, registration_id: str) -> Registration | None:
        return await self.store.get_registration(registration_id=registration_id)

    @Logger.io
    async def find_by_event_and_email(self, *, event_id: str, email: str) -> Registration | None:
        return await self.store.find_registration(event_id=event_id, email=email)

    @Logger.io
    async def insert(self, *, registration: Registration) -> str:
        return await self.store.insert_registration(registration=registration)

    @Logger.io
    async def update_status(
        self,
        *,
        registration_id: str,
        expected_status: RegistrationStatus,
        registration: Registration,
    ) -> bool:
        return await self.store.compare_and_set_registration_status(
            registration_id=registration_id,
            expected_status=expected_status,
            registration=registration,
        )

    @Logger.io
    async def delete(self, *, registration_id: str) -> Optional[Registration]:
        return await self.store.delete_registration(registration_id=registration_id)


class InMemoryRegistrationQueryRepoImpl(IRegistrationQueryRepo):
    def __init__(self, *, store: InMemoryDocumentStore) -> None:
        self.store = store

    @Logger.io
    async def list_registrations(
        self,
        *,
        event_id: Optional[str] = None,
        status: Optional[RegistrationStatus] = None,
    ) -> List[Registration]:
        return await self.store.list_registrations(event_id=event_id, status=status)

    @Logger.io
    async def count_by_event(
        self, *, event_id: str, statuses: Optional[frozenset[RegistrationStatus]] = None
    ) -> int:
        return await self.store.count_registrations(event_id=event_id, statuses=statuses)
