from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.registration_error import EventNotFoundError


class GetEventUseCase:
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
    async def get_by_id(self, *, event_id: str) -> EventEntity:
        async with self.uow:
            event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
        if event is None:
            raise EventNotFoundError()
        return event

    @Logger.io
    async def list_events(self) -> List[EventEntity]:
        async with self.uow:
            return await self.uow.event_query_repo.list_events()
