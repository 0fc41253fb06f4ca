from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.event_registration.domain.enum.event_status import EventStatus
from src.service.event_registration.domain.value_object.event_capacity import EventCapacity


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise DomainError(f'Event {attribute.name} cannot be empty')


@attrs.define
class EventEntity:
    id: str
    title: str = attrs.field(validator=_validate_non_empty_string)
    capacity: EventCapacity
    requires_approval: bool = True
    status: EventStatus = EventStatus.DRAFT
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        id: str,
        title: str,
        total_capacity: int,
        requires_approval: bool = True,
        status: EventStatus = EventStatus.DRAFT,
    ) -> 'EventEntity':
        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            title=title,
            capacity=EventCapacity(total=total_capacity),
            requires_approval=requires_approval,
            status=status,
            version=0,
            created_at=now,
            updated_at=now,
        )
