from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import uuid_utils

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.enum.event_status import EventStatus


class CreateEventUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, default_capacity: int = 50) -> None:
        self.uow = uow
        self.default_capacity = default_capacity

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        default_capacity: int = Depends(
            Provide[Container.config_service.provided.DEFAULT_EVENT_CAPACITY]
        ),
    ) -> Self:
        return cls(uow=uow, default_capacity=default_capacity)

    @Logger.io
    async def execute(
        self,
        *,
        title: str,
        total_capacity: Optional[int] = None,
        requires_approval: bool = True,
        status: EventStatus = EventStatus.DRAFT,
    ) -> EventEntity:
        event = EventEntity.create(
            id=str(uuid_utils.uuid7()),
            title=title,
            total_capacity=total_capacity if total_capacity is not None else self.default_capacity,
            requires_approval=requires_approval,
            status=status,
        )

        async with self.uow:
            self.uow.ensure_writable()
            created = await self.uow.event_command_repo.create(event=event)
            await self.uow.commit()

        Logger.base.info(
            f'🎫 [CREATE_EVENT] {created.id} with {created.capacity.total} seats '
            f'(requires_approval={created.requires_approval})'
        )
        return created
