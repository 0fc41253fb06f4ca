from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.event_registration.driven_adapter.memory.in_memory_document_store import (
    InMemoryDocumentStore,
)
from src.service.event_registration.driven_adapter.memory.in_memory_repo_impl import (
    InMemoryEventCommandRepoImpl,
    InMemoryEventQueryRepoImpl,
    InMemoryRegistrationCommandRepoImpl,
    InMemoryRegistrationQueryRepoImpl,
)


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    Writes land in the store immediately; commit and rollback do nothing.
    Multi-step use cases therefore undo partial work with compensating
    actions instead of relying on rollback.
    """

    def __init__(self, *, store: InMemoryDocumentStore) -> None:
        self.store = store
        self.event_command_repo = InMemoryEventCommandRepoImpl(store=store)
        self.event_query_repo = InMemoryEventQueryRepoImpl(store=store)
        self.registration_command_repo = InMemoryRegistrationCommandRepoImpl(store=store)
        self.registration_query_repo = InMemoryRegistrationQueryRepoImpl(store=store)

    async def _commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass
