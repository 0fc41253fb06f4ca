from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.event_registration.domain.registration_error import (
    EventHasRegistrationsError,
    EventNotFoundError,
)


class DeleteEventUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, event_id: str) -> None:
        async with self.uow:
            self.uow.ensure_writable()

            event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
            if event is None:
                raise EventNotFoundError()

            # Fast path; the store re-checks atomically inside delete()
            if await self.uow.registration_query_repo.count_by_event(event_id=event_id):
                raise EventHasRegistrationsError()

            if not await self.uow.event_command_repo.delete(event_id=event_id):
                raise EventNotFoundError()
            await self.uow.commit()

        Logger.base.info(f'🗑️ [DELETE_EVENT] Event {event_id} removed')
