"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.event_registration.driven_adapter.model.event_model import EventModel
from src.service.event_registration.driven_adapter.model.registration_model import (
    RegistrationModel,
)

__all__ = ['EventModel', 'RegistrationModel']
