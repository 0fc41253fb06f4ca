from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.registration_metrics import metrics
from src.service.event_registration.app.service.capacity_ledger import CapacityLedger
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.registration_error import (
    ConcurrentModificationError,
    EventNotFoundError,
    RegistrationNotFoundError,
)
from src.service.event_registration.domain.registration_transition import (
    LedgerEffect,
    parse_requested_status,
    resolve_transition,
)


class UpdateRegistrationStatusUseCase:
    """
    Approve, reject or cancel a registration.

    The seat effect comes from the transition table keyed on the status the
    registration had when the conditional write succeeded. If another request
    changed the status in between, the table is consulted again against the
    fresh status.
    """

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
    async def execute(
        self, *, registration_id: str, status: str, rejection_reason: Optional[str] = None
    ) -> Registration:
        requested = parse_requested_status(status)

        async with self.uow:
            self.uow.ensure_writable()
            repo = self.uow.registration_command_repo

            for _ in range(self.capacity_ledger.max_attempts):
                current = await repo.get_by_id(registration_id=registration_id)
                if current is None:
                    raise RegistrationNotFoundError()

                effect = resolve_transition(current=current.status, requested=requested)
                updated = current.with_status(status=requested, rejection_reason=rejection_reason)
                if await repo.update_status(
                    registration_id=registration_id,
                    expected_status=current.status,
                    registration=updated,
                ):
                    break
            else:
                raise ConcurrentModificationError()

            if effect is LedgerEffect.RELEASE_SEAT:
                try:
                    await self.capacity_ledger.release(
                        event_repo=self.uow.event_command_repo, event_id=updated.event_id
                    )
                except EventNotFoundError:
                    Logger.base.warning(
                        f'⚠️ [STATUS] Event {updated.event_id} of registration '
                        f'{registration_id} is gone, no seat to release'
                    )
                except Exception as e:
                    await self._restore_status(previous=current, written=updated, cause=e)
                    raise

            await self.uow.commit()

        metrics.record_transition(from_status=current.status.value, to_status=requested.value)
        Logger.base.info(
            f'🔁 [STATUS] {registration_id}: {current.status} -> {requested} ({effect})'
        )
        return updated

    async def _restore_status(
        self, *, previous: Registration, written: Registration, cause: Exception
    ) -> None:
        """Put back the status whose seat could not be released."""
        Logger.base.warning(
            f'↩️ [STATUS] Release failed for {previous.id} ({type(cause).__name__}), '
            f'restoring {previous.status}'
        )
        try:
            restored = await self.uow.registration_command_repo.update_status(
                registration_id=previous.id,
                expected_status=written.status,
                registration=previous,
            )
        except Exception:
            # The release error is what the caller sees
            Logger.base.exception(f'❌ [STATUS] Could not restore status of {previous.id}')
            return
        if not restored:
            Logger.base.error(
                f'❌ [STATUS] {previous.id} changed again before its status could be restored'
            )
