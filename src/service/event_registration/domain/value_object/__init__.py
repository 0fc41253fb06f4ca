"""Event Registration Domain Value Objects"""

from src.service.event_registration.domain.value_object.attendee_info import (
    AttendeeInfo,
    normalize_email,
)
from src.service.event_registration.domain.value_object.event_capacity import (
    CapacitySnapshot,
    EventCapacity,
)
from src.service.event_registration.domain.value_object.invitation_code import (
    generate_invitation_code,
)

__all__ = [
    'AttendeeInfo',
    'CapacitySnapshot',
    'EventCapacity',
    'generate_invitation_code',
    'normalize_email',
]
