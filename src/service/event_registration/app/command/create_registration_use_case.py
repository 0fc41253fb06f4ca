from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.registration_metrics import metrics
from src.service.event_registration.app.service.capacity_ledger import CapacityLedger
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.registration_error import (
    DuplicateRegistrationError,
    EventNotFoundError,
    ValidationError,
)
from src.service.event_registration.domain.value_object.attendee_info import AttendeeInfo
from src.service.event_registration.domain.value_object.invitation_code import (
    generate_invitation_code,
)


class CreateRegistrationUseCase:
    """
    Register an attendee for an event and take one seat.

    Flow (one unit of work):
    1. Reject a known (event, email) pair early
    2. Load the event for requires_approval
    3. Reserve a seat through the CapacityLedger
    4. Insert the registration; the store's unique constraint decides races
       between concurrent submissions of the same attendee
    5. If the insert fails, release the seat before re-raising
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        capacity_ledger: CapacityLedger,
        invitation_code_prefix: str = 'INV',
    ) -> None:
        self.uow = uow
        self.capacity_ledger = capacity_ledger
        self.invitation_code_prefix = invitation_code_prefix
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        capacity_ledger: CapacityLedger = Depends(Provide[Container.capacity_ledger]),
        invitation_code_prefix: str = Depends(
            Provide[Container.config_service.provided.INVITATION_CODE_PREFIX]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            capacity_ledger=capacity_ledger,
            invitation_code_prefix=invitation_code_prefix,
        )

    @Logger.io
    async def execute(
        self,
        *,
        event_id: str,
        attendee_info: AttendeeInfo,
        total_amount: float = 0.0,
        pricing_id: Optional[str] = None,
    ) -> Registration:
        if not event_id or not event_id.strip():
            raise ValidationError()

        with self.tracer.start_as_current_span('use_case.create_registration') as span:
            span.set_attribute('event_id', event_id)

            async with self.uow:
                self.uow.ensure_writable()

                existing = await self.uow.registration_command_repo.find_by_event_and_email(
                    event_id=event_id, email=attendee_info.email
                )
                if existing:
                    raise DuplicateRegistrationError()

                event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
                if event is None:
                    raise EventNotFoundError()

                registration = Registration.create(
                    id=str(uuid_utils.uuid7()),
                    event_id=event_id,
                    attendee_info=attendee_info,
                    invitation_code=generate_invitation_code(prefix=self.invitation_code_prefix),
                    requires_approval=event.requires_approval,
                    total_amount=total_amount,
                    pricing_id=pricing_id,
                )

                capacity = await self.capacity_ledger.reserve(
                    event_repo=self.uow.event_command_repo, event_id=event_id
                )
                try:
                    await self.uow.registration_command_repo.insert(registration=registration)
                except Exception as e:
                    await self._release_reserved_seat(event_id=event_id, cause=e)
                    raise

                await self.uow.commit()

            span.set_attribute('registration.id', registration.id)
            span.set_attribute('capacity.available', capacity.available)

        metrics.record_transition(from_status='none', to_status=registration.status.value)
        Logger.base.info(
            f'📝 [REGISTER] {registration.id} for event {event_id} -> {registration.status} '
            f'({capacity.available}/{capacity.total} seats left)'
        )
        return registration

    async def _release_reserved_seat(self, *, event_id: str, cause: Exception) -> None:
        Logger.base.warning(
            f'↩️ [REGISTER] Insert failed for event {event_id} ({type(cause).__name__}), '
            f'releasing reserved seat'
        )
        try:
            await self.capacity_ledger.release(
                event_repo=self.uow.event_command_repo, event_id=event_id
            )
        except Exception:
            # The insert error is what the caller sees; a failed compensation is logged loudly
            Logger.base.exception(f'❌ [REGISTER] Could not release seat on event {event_id}')
