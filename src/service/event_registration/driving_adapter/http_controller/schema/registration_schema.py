from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.value_object.attendee_info import AttendeeInfo
from src.service.event_registration.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)


class AttendeeInfoSchema(CamelModel):
    email: str = ''
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None

    def to_domain(self) -> AttendeeInfo:
        return AttendeeInfo(**self.model_dump())

    @classmethod
    def from_domain(cls, attendee_info: AttendeeInfo) -> 'AttendeeInfoSchema':
        return cls(**attendee_info.to_dict())


class RegistrationCreateRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            'examples': [
                {
                    'eventId': '0193a3f4-5e73-7c4e-a9c5-123456789abc',
                    'attendeeInfo': {
                        'email': 'jane.doe@clinic.com',
                        'firstName': 'Jane',
                        'lastName': 'Doe',
                        'company': 'Doe Aesthetics',
                    },
                    'pricingId': 'early_bird',
                    'totalAmount': 249,
                }
            ]
        },
    )

    # Left lenient so missing fields reach the workflow's own validation message
    event_id: str = ''
    attendee_info: AttendeeInfoSchema = Field(default_factory=AttendeeInfoSchema)
    pricing_id: Optional[str] = None
    total_amount: Optional[float] = None


class RegistrationStatusUpdateRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            'examples': [
                {'status': 'approved'},
                {'status': 'rejected', 'rejectionReason': 'Not a licensed practitioner'},
            ]
        },
    )

    status: str = ''
    rejection_reason: Optional[str] = None


class RegistrationResponse(CamelModel):
    id: str
    event_id: str
    attendee_info: AttendeeInfoSchema
    pricing_id: Optional[str] = None
    total_amount: float
    status: str
    payment_status: str
    invitation_code: str
    registration_date: datetime
    rejection_reason: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, registration: Registration) -> 'RegistrationResponse':
        return cls(
            id=registration.id,
            event_id=registration.event_id,
            attendee_info=AttendeeInfoSchema.from_domain(registration.attendee_info),
            pricing_id=registration.pricing_id,
            total_amount=registration.total_amount,
            status=registration.status.value,
            payment_status=registration.payment_status.value,
            invitation_code=registration.invitation_code,
            registration_date=registration.registration_date,
            rejection_reason=registration.rejection_reason,
            updated_at=registration.updated_at,
        )


class RegistrationEnvelope(CamelModel):
    success: bool = True
    registration: RegistrationResponse
    message: Optional[str] = None


class RegistrationListResponse(CamelModel):
    success: bool = True
    registrations: List[RegistrationResponse]
    count: int


class MessageResponse(CamelModel):
    success: bool = True
    message: str
