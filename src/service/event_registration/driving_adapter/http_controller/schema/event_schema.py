from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.enum.event_status import EventStatus
from src.service.event_registration.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)


class CapacityTotalSchema(CamelModel):
    total: int = Field(gt=0)


class CapacitySchema(CamelModel):
    total: int
    reserved: int
    available: int


class EventCreateRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            'examples': [
                {
                    'title': 'Advanced Aesthetic Injection Techniques Workshop',
                    'capacity': {'total': 50},
                    'requiresApproval': True,
                    'status': 'published',
                },
                {'title': 'Open Day'},
            ]
        },
    )

    title: str = Field(min_length=1, max_length=255)
    capacity: Optional[CapacityTotalSchema] = None
    requires_approval: bool = True
    status: EventStatus = EventStatus.DRAFT


class EventResponse(CamelModel):
    id: str
    title: str
    status: str
    requires_approval: bool
    capacity: CapacitySchema
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        return cls(
            id=event.id,
            title=event.title,
            status=event.status.value,
            requires_approval=event.requires_approval,
            capacity=CapacitySchema(**event.capacity.to_dict()),
            created_at=event.created_at,
            updated_at=event.updated_at,
        )


class EventEnvelope(CamelModel):
    success: bool = True
    event: EventResponse
    message: Optional[str] = None


class EventListResponse(CamelModel):
    success: bool = True
    events: List[EventResponse]
    count: int
