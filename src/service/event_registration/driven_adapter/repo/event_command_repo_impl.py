from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from src.platform.logging.loguru_io import Logger
from src.service.event_registration.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.registration_error import EventHasRegistrationsError
from src.service.event_registration.domain.value_object.event_capacity import (
    CapacitySnapshot,
    EventCapacity,
)
from src.service.event_registration.driven_adapter.model.event_model import EventModel
from src.service.event_registration.driven_adapter.model.registration_model import (
    FK_REGISTRATION_EVENT,
)
from src.service.event_registration.driven_adapter.repo.orm_mapper import (
    event_entity_to_model,
    event_model_to_entity,
)


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, event: EventEntity) -> EventEntity:
        model = event_entity_to_model(event)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return event_model_to_entity(model)

    @Logger.io
    async def get_capacity(self, *, event_id: str) -> CapacitySnapshot | None:
        result = await self.session.execute(
            select(
                EventModel.capacity_total, EventModel.capacity_reserved, EventModel.version
            ).where(EventModel.id == event_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return CapacitySnapshot(
            capacity=EventCapacity(total=row.capacity_total, reserved=row.capacity_reserved),
            version=row.version,
        )

    @Logger.io
    async def compare_and_set_capacity(
        self, *, event_id: str, expected_version: int, capacity: EventCapacity
    ) -> bool:
        # Under READ COMMITTED a concurrent writer's row lock makes this statement
        # wait and then re-check the version against the committed row.
        result = await self.session.execute(
            update(EventModel)
            .where(EventModel.id == event_id, EventModel.version == expected_version)
            .values(
                capacity_total=capacity.total,
                capacity_reserved=capacity.reserved,
                capacity_available=capacity.available,
                version=EventModel.version + 1,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def delete(self, *, event_id: str) -> bool:
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(
                    delete(EventModel)
                    .where(EventModel.id == event_id)
                    .execution_options(synchronize_session=False)
                )
        except IntegrityError as e:
            if FK_REGISTRATION_EVENT in str(e.orig):
                raise EventHasRegistrationsError() from e
            raise
        return result.rowcount == 1  # type: ignore[attr-defined]
