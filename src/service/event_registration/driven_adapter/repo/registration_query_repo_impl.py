from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_registration.app.interface.i_registration_query_repo import (
    IRegistrationQueryRepo,
)
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.driven_adapter.model.registration_model import (
    RegistrationModel,
)
from src.service.event_registration.driven_adapter.repo.orm_mapper import (
    registration_model_to_entity,
)


class RegistrationQueryRepoImpl(IRegistrationQueryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def list_registrations(
        self,
        *,
        event_id: Optional[str] = None,
        status: Optional[RegistrationStatus] = None,
    ) -> List[Registration]:
        stmt = select(RegistrationModel)
        if event_id:
            stmt = stmt.where(RegistrationModel.event_id == event_id)
        if status:
            stmt = stmt.where(RegistrationModel.status == status.value)
        stmt = stmt.order_by(
            RegistrationModel.registration_date.desc(), RegistrationModel.id.desc()
        )

        result = await self.session.execute(stmt)
        return [registration_model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def count_by_event(
        self, *, event_id: str, statuses: Optional[frozenset[RegistrationStatus]] = None
    ) -> int:
        stmt = select(func.count()).select_from(RegistrationModel).where(
            RegistrationModel.event_id == event_id
        )
        if statuses:
            stmt = stmt.where(RegistrationModel.status.in_([s.value for s in statuses]))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
