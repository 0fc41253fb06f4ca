"""
Read-only degraded mode

Serves the fixture documents through the regular repository interfaces.
Reads delegate to an in-memory store seeded once; every write raises
StoreUnavailableError so no mutation can appear to succeed.
"""

from typing import NoReturn, Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.domain.registration_error import StoreUnavailableError
from src.service.event_registration.domain.value_object.event_capacity import EventCapacity
from src.service.event_registration.driven_adapter.fixture.fixture_data import (
    build_fixture_events,
    build_fixture_registrations,
)
from src.service.event_registration.driven_adapter.memory.in_memory_document_store import (
    InMemoryDocumentStore,
)
from src.service.event_registration.driven_adapter.memory.in_memory_repo_impl import (
    InMemoryEventCommandRepoImpl,
    InMemoryEventQueryRepoImpl,
    InMemoryRegistrationCommandRepoImpl,
    InMemoryRegistrationQueryRepoImpl,
)


def _reject_write() -> NoReturn:
    raise StoreUnavailableError()


def build_fixture_store() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    store.seed(events=build_fixture_events(), registrations=build_fixture_registrations())
    return store


class ReadOnlyEventCommandRepoImpl(InMemoryEventCommandRepoImpl):
    async def create(self, *, event: EventEntity) -> EventEntity:
        _reject_write()

    async def compare_and_set_capacity(
        self, *, event_id: str, expected_version: int, capacity: EventCapacity
    ) -> bool:
        _reject_write()

    async def delete(self, *, event_id: str) -> bool:
        _reject_write()


class ReadOnlyRegistrationCommandRepoImpl(InMemoryRegistrationCommandRepoImpl):
    async def insert(self, *, registration: Registration) -> str:
        _reject_write()

    async def update_status(
        self,
        *,
        registration_id: str,
        expected_status: RegistrationStatus,
        registration: Registration,
    ) -> bool:
        _reject_write()

    async def delete(self, *, registration_id: str) -> Optional[Registration]:
        _reject_write()


class FixtureUnitOfWork(AbstractUnitOfWork):
    read_only = True

    def __init__(self, *, store: InMemoryDocumentStore) -> None:
        self.event_command_repo = ReadOnlyEventCommandRepoImpl(store=store)
        self.event_query_repo = InMemoryEventQueryRepoImpl(store=store)
        self.registration_command_repo = ReadOnlyRegistrationCommandRepoImpl(store=store)
        self.registration_query_repo = InMemoryRegistrationQueryRepoImpl(store=store)

    async def _commit(self) -> None:
        _reject_write()

    async def rollback(self) -> None:
        pass
