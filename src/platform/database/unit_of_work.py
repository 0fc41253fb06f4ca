"""
Unit of Work Pattern - one store session and its repositories per use case call

Architecture:
- UoW owns the session lifecycle and commit/rollback
- Repositories receive the UoW's session, never open their own
- Use cases coordinate the event and registration repositories through one UoW
"""

from __future__ import annotations

import abc
from types import TracebackType
from typing import TYPE_CHECKING, Callable, Optional

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from src.service.event_registration.app.interface.i_event_command_repo import (
        IEventCommandRepo,
    )
    from src.service.event_registration.app.interface.i_event_query_repo import IEventQueryRepo
    from src.service.event_registration.app.interface.i_registration_command_repo import (
        IRegistrationCommandRepo,
    )
    from src.service.event_registration.app.interface.i_registration_query_repo import (
        IRegistrationQueryRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            uow.ensure_writable()
            await uow.registration_command_repo.insert(registration=...)
            await uow.commit()

    Leaving the block without commit() rolls back. Backends without
    transactions (in-memory) make rollback a no-op; callers compensate
    explicitly where that matters.
    """

    event_command_repo: IEventCommandRepo
    event_query_repo: IEventQueryRepo
    registration_command_repo: IRegistrationCommandRepo
    registration_query_repo: IRegistrationQueryRepo

    read_only: bool = False

    def ensure_writable(self) -> None:
        if self.read_only:
            from src.service.event_registration.domain.registration_error import (
                StoreUnavailableError,
            )

            raise StoreUnavailableError()

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


# Connection-level failures reported as "store unavailable" instead of a 500
_CONNECTION_ERRORS = (OperationalError, InterfaceError, ConnectionError, OSError)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(
        self, session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self._session_factory = session_factory
        self._session_cm: Optional[AbstractAsyncContextManager[AsyncSession]] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.event_registration.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from src.service.event_registration.driven_adapter.repo.event_query_repo_impl import (
            EventQueryRepoImpl,
        )
        from src.service.event_registration.driven_adapter.repo.registration_command_repo_impl import (
            RegistrationCommandRepoImpl,
        )
        from src.service.event_registration.driven_adapter.repo.registration_query_repo_impl import (
            RegistrationQueryRepoImpl,
        )

        self._session_cm = self._session_factory()
        self.session = await self._session_cm.__aenter__()

        # Create repositories with shared session
        self.event_command_repo = EventCommandRepoImpl(session=self.session)
        self.event_query_repo = EventQueryRepoImpl(session=self.session)
        self.registration_command_repo = RegistrationCommandRepoImpl(session=self.session)
        self.registration_query_repo = RegistrationQueryRepoImpl(session=self.session)

        await super().__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        except _CONNECTION_ERRORS as rollback_error:
            Logger.base.warning(f'[UoW] Rollback failed: {rollback_error!r}')
        finally:
            if self._session_cm is not None:
                await self._session_cm.__aexit__(None, None, None)
            self._session_cm = None
            self.session = None

        if isinstance(exc, _CONNECTION_ERRORS):
            from src.service.event_registration.domain.registration_error import (
                StoreUnavailableError,
            )

            raise StoreUnavailableError('Data store is unavailable') from exc

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() outside of "async with uow"'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
