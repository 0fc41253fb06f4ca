from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.registration_metrics import metrics
from src.service.event_registration.app.service.capacity_ledger import CapacityLedger
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.registration_error import (
    EventNotFoundError,
    RegistrationNotFoundError,
)
from src.service.event_registration.domain.registration_transition import (
    LedgerEffect,
    resolve_delete,
)


class DeleteRegistrationUseCase:
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
    async def execute(self, *, registration_id: str) -> Registration:
        """
        Delete a registration, releasing its seat only if it still held one.

        The status used is the one the store removed, so two concurrent
        deletes release at most once.
        """
        async with self.uow:
            self.uow.ensure_writable()

            removed = await self.uow.registration_command_repo.delete(
                registration_id=registration_id
            )
            if removed is None:
                raise RegistrationNotFoundError()

            if resolve_delete(current=removed.status) is LedgerEffect.RELEASE_SEAT:
                try:
                    await self.capacity_ledger.release(
                        event_repo=self.uow.event_command_repo, event_id=removed.event_id
                    )
                except EventNotFoundError:
                    Logger.base.warning(
                        f'⚠️ [DELETE] Event {removed.event_id} of registration '
                        f'{registration_id} is gone, no seat to release'
                    )
                except Exception as e:
                    await self._restore_registration(removed=removed, cause=e)
                    raise

            await self.uow.commit()

        metrics.record_transition(from_status=removed.status.value, to_status='deleted')
        Logger.base.info(
            f'🗑️ [DELETE] Registration {registration_id} ({removed.status}) removed'
        )
        return removed

    async def _restore_registration(self, *, removed: Registration, cause: Exception) -> None:
        """Re-insert a registration whose seat could not be released."""
        Logger.base.warning(
            f'↩️ [DELETE] Release failed for {removed.id} ({type(cause).__name__}), '
            f'restoring the registration'
        )
        try:
            await self.uow.registration_command_repo.insert(registration=removed)
        except Exception:
            # The release error is what the caller sees
            Logger.base.exception(f'❌ [DELETE] Could not restore registration {removed.id}')
