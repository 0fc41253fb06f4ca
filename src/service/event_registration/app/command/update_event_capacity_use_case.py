from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.event_registration.app.service.capacity_ledger import CapacityLedger
from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.registration_error import EventNotFoundError


class UpdateEventCapacityUseCase:
    """Change an event's seat total; never below the seats already reserved."""

    def __init__(self, *, uow: AbstractUnitOfWork, capacity_ledger: CapacityLedger) -> None:
        self.uow = uow
        self.capacity_ledger = capacity_ledger

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        capacity_ledger: CapacityLedger = Depends(Provide[Container.capacity_ledger]),
    ) -> Self:
        return cls(uow=uow, capacity_ledger=capacity_ledger)

    @Logger.io
    async def execute(self, *, event_id: str, total: int) -> EventEntity:
        async with self.uow:
            self.uow.ensure_writable()
            await self.capacity_ledger.resize(
                event_repo=self.uow.event_command_repo, event_id=event_id, total=total
            )
            event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
            if event is None:
                raise EventNotFoundError()
            await self.uow.commit()

        Logger.base.info(f'📐 [CAPACITY] Event {event_id} total set to {total}')
        return event
