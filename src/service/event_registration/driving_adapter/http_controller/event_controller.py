from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.event_registration.app.command.create_event_use_case import CreateEventUseCase
from src.service.event_registration.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.event_registration.app.command.update_event_capacity_use_case import (
    UpdateEventCapacityUseCase,
)
from src.service.event_registration.app.query.get_event_use_case import GetEventUseCase
from src.service.event_registration.driving_adapter.http_controller.schema.event_schema import (
    CapacityTotalSchema,
    EventCreateRequest,
    EventEnvelope,
    EventListResponse,
    EventResponse,
)
from src.service.event_registration.driving_adapter.http_controller.schema.registration_schema import (
    MessageResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventEnvelope:
    event = await use_case.execute(
        title=request.title,
        total_capacity=request.capacity.total if request.capacity else None,
        requires_approval=request.requires_approval,
        status=request.status,
    )
    return EventEnvelope(
        event=EventResponse.from_entity(event), message='Event created successfully'
    )


@router.get('')
@Logger.io
async def list_events(
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventListResponse:
    events = await use_case.list_events()
    return EventListResponse(
        events=[EventResponse.from_entity(event) for event in events], count=len(events)
    )


@router.get('/{event_id}')
@Logger.io
async def get_event(
    event_id: str,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventEnvelope:
    event = await use_case.get_by_id(event_id=event_id)
    return EventEnvelope(event=EventResponse.from_entity(event))


@router.patch('/{event_id}/capacity')
@Logger.io
async def update_event_capacity(
    event_id: str,
    request: CapacityTotalSchema,
    use_case: UpdateEventCapacityUseCase = Depends(UpdateEventCapacityUseCase.depends),
) -> EventEnvelope:
    event = await use_case.execute(event_id=event_id, total=request.total)
    return EventEnvelope(event=EventResponse.from_entity(event), message='Capacity updated')


@router.delete('/{event_id}')
@Logger.io
async def delete_event(
    event_id: str,
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> MessageResponse:
    await use_case.execute(event_id=event_id)
    return MessageResponse(message='Event deleted successfully')
