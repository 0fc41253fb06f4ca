from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_registration.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.driven_adapter.model.event_model import EventModel
from src.service.event_registration.driven_adapter.repo.orm_mapper import event_model_to_entity


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, event_id: str) -> EventEntity | None:
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == event_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return event_model_to_entity(model) if model else None

    @Logger.io
    async def list_events(self) -> List[EventEntity]:
        result = await self.session.execute(
            select(EventModel).order_by(EventModel.created_at.desc(), EventModel.id.desc())
        )
        return [event_model_to_entity(model) for model in result.scalars().all()]
