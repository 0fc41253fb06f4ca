from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.event_registration.app.command.create_registration_use_case import (
    CreateRegistrationUseCase,
)
from src.service.event_registration.app.command.delete_registration_use_case import (
    DeleteRegistrationUseCase,
)
from src.service.event_registration.app.command.update_registration_status_use_case import (
    UpdateRegistrationStatusUseCase,
)
from src.service.event_registration.app.query.list_registrations_use_case import (
    ListRegistrationsUseCase,
)
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.driving_adapter.http_controller.schema.registration_schema import (
    MessageResponse,
    RegistrationCreateRequest,
    RegistrationEnvelope,
    RegistrationListResponse,
    RegistrationResponse,
    RegistrationStatusUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_registration(
    request: RegistrationCreateRequest,
    use_case: CreateRegistrationUseCase = Depends(CreateRegistrationUseCase.depends),
) -> RegistrationEnvelope:
    with tracer.start_as_current_span('controller.create_registration') as span:
        span.set_attribute('event_id', request.event_id)

        registration = await use_case.execute(
            event_id=request.event_id,
            attendee_info=request.attendee_info.to_domain(),
            total_amount=request.total_amount or 0.0,
            pricing_id=request.pricing_id,
        )

        message = (
            'Registration submitted for approval'
            if registration.status == RegistrationStatus.PENDING
            else 'Registration completed successfully'
        )
        return RegistrationEnvelope(
            registration=RegistrationResponse.from_entity(registration), message=message
        )


@router.get('')
@Logger.io
async def list_registrations(
    event_id: Optional[str] = Query(default=None, alias='eventId'),
    registration_status: Optional[str] = Query(default=None, alias='status'),
    use_case: ListRegistrationsUseCase = Depends(ListRegistrationsUseCase.depends),
) -> RegistrationListResponse:
    registrations = await use_case.list_registrations(
        event_id=event_id, status=registration_status
    )
    return RegistrationListResponse(
        registrations=[RegistrationResponse.from_entity(r) for r in registrations],
        count=len(registrations),
    )


@router.get('/{registration_id}')
@Logger.io
async def get_registration(
    registration_id: str,
    use_case: ListRegistrationsUseCase = Depends(ListRegistrationsUseCase.depends),
) -> RegistrationEnvelope:
    registration = await use_case.get_by_id(registration_id=registration_id)
    return RegistrationEnvelope(registration=RegistrationResponse.from_entity(registration))


@router.put('/{registration_id}')
@Logger.io
async def update_registration_status(
    registration_id: str,
    request: RegistrationStatusUpdateRequest,
    use_case: UpdateRegistrationStatusUseCase = Depends(UpdateRegistrationStatusUseCase.depends),
) -> RegistrationEnvelope:
    with tracer.start_as_current_span('controller.update_registration_status') as span:
        span.set_attribute('registration_id', registration_id)
        span.set_attribute('requested_status', request.status)

        registration = await use_case.execute(
            registration_id=registration_id,
            status=request.status,
            rejection_reason=request.rejection_reason,
        )
        return RegistrationEnvelope(
            registration=RegistrationResponse.from_entity(registration),
            message=f'Registration {registration.status.value} successfully',
        )


@router.delete('/{registration_id}')
@Logger.io
async def delete_registration(
    registration_id: str,
    use_case: DeleteRegistrationUseCase = Depends(DeleteRegistrationUseCase.depends),
) -> MessageResponse:
    await use_case.execute(registration_id=registration_id)
    return MessageResponse(message='Registration deleted successfully')
