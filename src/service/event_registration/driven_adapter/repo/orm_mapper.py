from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.event_status import EventStatus
from src.service.event_registration.domain.enum.registration_status import (
    PaymentStatus,
    RegistrationStatus,
)
from src.service.event_registration.domain.value_object.attendee_info import AttendeeInfo
from src.service.event_registration.domain.value_object.event_capacity import EventCapacity
from src.service.event_registration.driven_adapter.model.event_model import EventModel
from src.service.event_registration.driven_adapter.model.registration_model import (
    RegistrationModel,
)


def event_model_to_entity(model: EventModel) -> EventEntity:
    return EventEntity(
        id=model.id,
        title=model.title,
        capacity=EventCapacity(total=model.capacity_total, reserved=model.capacity_reserved),
        requires_approval=model.requires_approval,
        status=EventStatus(model.status),
        version=model.version,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def event_entity_to_model(event: EventEntity) -> EventModel:
    return EventModel(
        id=event.id,
        title=event.title,
        status=event.status.value,
        requires_approval=event.requires_approval,
        capacity_total=event.capacity.total,
        capacity_reserved=event.capacity.reserved,
        capacity_available=event.capacity.available,
        version=event.version,
    )


def registration_model_to_entity(model: RegistrationModel) -> Registration:
    return Registration(
        id=model.id,
        event_id=model.event_id,
        attendee_info=AttendeeInfo(**model.attendee_info),
        status=RegistrationStatus(model.status),
        payment_status=PaymentStatus(model.payment_status),
        invitation_code=model.invitation_code,
        registration_date=model.registration_date,
        total_amount=model.total_amount,
        pricing_id=model.pricing_id,
        rejection_reason=model.rejection_reason,
        updated_at=model.updated_at,
    )


def registration_entity_to_model(registration: Registration) -> RegistrationModel:
    return RegistrationModel(
        id=registration.id,
        event_id=registration.event_id,
        attendee_email=registration.attendee_email,
        attendee_info=registration.attendee_info.to_dict(),
        pricing_id=registration.pricing_id,
        total_amount=registration.total_amount,
        status=registration.status.value,
        payment_status=registration.payment_status.value,
        invitation_code=registration.invitation_code,
        rejection_reason=registration.rejection_reason,
        registration_date=registration.registration_date,
        updated_at=registration.updated_at,
    )
