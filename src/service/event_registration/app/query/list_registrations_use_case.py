from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.domain.registration_error import (
    InvalidStatusFilterError,
    RegistrationNotFoundError,
)


ALL_STATUSES = 'all'


def parse_status_filter(value: Optional[str]) -> Optional[RegistrationStatus]:
    if not value or value == ALL_STATUSES:
        return None
    try:
        return RegistrationStatus(value)
    except ValueError:
        raise InvalidStatusFilterError() from None


class ListRegistrationsUseCase:
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
    async def list_registrations(
        self, *, event_id: Optional[str] = None, status: Optional[str] = None
    ) -> List[Registration]:
        """Newest first; status 'all' or empty means no status filter."""
        status_filter = parse_status_filter(status)
        async with self.uow:
            return await self.uow.registration_query_repo.list_registrations(
                event_id=event_id or None, status=status_filter
            )

    @Logger.io
    async def get_by_id(self, *, registration_id: str) -> Registration:
        async with self.uow:
            registration = await self.uow.registration_command_repo.get_by_id(
                registration_id=registration_id
            )
        if registration is None:
            raise RegistrationNotFoundError()
        return registration
