"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.event_registration.app.service.capacity_ledger import CapacityLedger
from src.service.event_registration.driven_adapter.fixture.fixture_unit_of_work import (
    FixtureUnitOfWork,
    build_fixture_store,
)
from src.service.event_registration.driven_adapter.memory.in_memory_document_store import (
    InMemoryDocumentStore,
)
from src.service.event_registration.driven_adapter.memory.in_memory_unit_of_work import (
    InMemoryUnitOfWork,
)


def _store_backend(settings: Settings) -> str:
    return settings.STORE_BACKEND.value


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Stores
    database = providers.Singleton(Database)
    document_store = providers.Singleton(InMemoryDocumentStore)
    fixture_store = providers.Singleton(build_fixture_store)

    # One unit of work per use case call, backend chosen by STORE_BACKEND
    unit_of_work = providers.Selector(
        providers.Callable(_store_backend, settings=config_service),
        postgres=providers.Factory(
            SqlAlchemyUnitOfWork, session_factory=database.provided.session
        ),
        memory=providers.Factory(InMemoryUnitOfWork, store=document_store),
        fixture=providers.Factory(FixtureUnitOfWork, store=fixture_store),
    )

    # Domain services
    capacity_ledger = providers.Singleton(
        CapacityLedger,
        max_attempts=config_service.provided.LEDGER_MAX_ATTEMPTS,
        backoff_base_seconds=config_service.provided.LEDGER_BACKOFF_BASE_SECONDS,
        backoff_max_seconds=config_service.provided.LEDGER_BACKOFF_MAX_SECONDS,
    )


container = Container()


def setup() -> None:
    container.config_service()
    container.capacity_ledger()


def cleanup() -> None:
    container.document_store().reset()
    container.reset_singletons()
