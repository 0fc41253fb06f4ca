"""Event Registration Domain Enums"""

from src.service.event_registration.domain.enum.event_status import EventStatus
from src.service.event_registration.domain.enum.registration_status import (
    PaymentStatus,
    RegistrationStatus,
)

__all__ = ['EventStatus', 'PaymentStatus', 'RegistrationStatus']
