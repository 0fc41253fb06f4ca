from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_registration.app.interface.i_registration_command_repo import (
    IRegistrationCommandRepo,
)
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.domain.registration_error import (
    DuplicateRegistrationError,
    EventNotFoundError,
)
from src.service.event_registration.driven_adapter.model.registration_model import (
    FK_REGISTRATION_EVENT,
    UQ_REGISTRATION_EVENT_EMAIL,
    RegistrationModel,
)
from src.service.event_registration.driven_adapter.repo.orm_mapper import (
    registration_entity_to_model,
    registration_model_to_entity,
)


class RegistrationCommandRepoImpl(IRegistrationCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, registration_id: str) -> Registration | None:
        result = await self.session.execute(
            select(RegistrationModel)
            .where(RegistrationModel.id == registration_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return registration_model_to_entity(model) if model else None

    @Logger.io
    async def find_by_event_and_email(self, *, event_id: str, email: str) -> Registration | None:
        result = await self.session.execute(
            select(RegistrationModel).where(
                RegistrationModel.event_id == event_id,
                RegistrationModel.attendee_email == email,
            )
        )
        model = result.scalar_one_or_none()
        return registration_model_to_entity(model) if model else None

    @Logger.io
    async def insert(self, *, registration: Registration) -> str:
        # SAVEPOINT keeps the outer transaction usable for the compensating release
        try:
            async with self.session.begin_nested():
                self.session.add(registration_entity_to_model(registration))
                await self.session.flush()
        except IntegrityError as e:
            constraint = str(e.orig)
            if UQ_REGISTRATION_EVENT_EMAIL in constraint:
                raise DuplicateRegistrationError() from e
            if FK_REGISTRATION_EVENT in constraint:
                raise EventNotFoundError() from e
            raise
        return registration.id

    @Logger.io
    async def update_status(
        self,
        *,
        registration_id: str,
        expected_status: RegistrationStatus,
        registration: Registration,
    ) -> bool:
        result = await self.session.execute(
            update(RegistrationModel)
            .where(
                RegistrationModel.id == registration_id,
                RegistrationModel.status == expected_status.value,
            )
            .values(
                status=registration.status.value,
                rejection_reason=registration.rejection_reason,
                updated_at=registration.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def delete(self, *, registration_id: str) -> Optional[Registration]:
        result = await self.session.execute(
            delete(RegistrationModel)
            .where(RegistrationModel.id == registration_id)
            .returning(RegistrationModel)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return registration_model_to_entity(model) if model else None
