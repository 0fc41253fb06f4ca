"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.event_registration.app.command import (
    create_event_use_case,
    create_registration_use_case,
    delete_event_use_case,
    delete_registration_use_case,
    update_event_capacity_use_case,
    update_registration_status_use_case,
)
from src.service.event_registration.app.query import (
    get_event_use_case,
    list_registrations_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_registration_use_case,
    update_registration_status_use_case,
    delete_registration_use_case,
    create_event_use_case,
    update_event_capacity_use_case,
    delete_event_use_case,
    get_event_use_case,
    list_registrations_use_case,
]
