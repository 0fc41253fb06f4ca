"""Sample documents served when the service runs without a data store."""

from datetime import datetime, timezone
from typing import List

from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.event_status import EventStatus
from src.service.event_registration.domain.enum.registration_status import (
    PaymentStatus,
    RegistrationStatus,
)
from src.service.event_registration.domain.value_object.attendee_info import AttendeeInfo
from src.service.event_registration.domain.value_object.event_capacity import EventCapacity


FIXTURE_EVENT_ID = '1'


def build_fixture_events() -> List[EventEntity]:
    created = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)
    return [
        EventEntity(
            id=FIXTURE_EVENT_ID,
            title='Advanced Aesthetic Injection Techniques Workshop',
            capacity=EventCapacity(total=50, reserved=3),
            requires_approval=True,
            status=EventStatus.PUBLISHED,
            version=3,
            created_at=created,
            updated_at=created,
        )
    ]


def build_fixture_registrations() -> List[Registration]:
    return [
        Registration(
            id='1',
            event_id=FIXTURE_EVENT_ID,
            attendee_info=AttendeeInfo(
                email='david.smith@clinic.com',
                first_name='David',
                last_name='Smith',
                phone='+1-555-0123',
                company='Smith Aesthetic Clinic',
                title='Medical Director',
            ),
            pricing_id='early_bird',
            total_amount=249.0,
            status=RegistrationStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            invitation_code='INV-001',
            registration_date=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        ),
        Registration(
            id='2',
            event_id=FIXTURE_EVENT_ID,
            attendee_info=AttendeeInfo(
                email='sarah.johnson@medcenter.com',
                first_name='Sarah',
                last_name='Johnson',
                phone='+1-555-0456',
                company='Johnson Medical Center',
                title='Aesthetic Nurse Practitioner',
            ),
            pricing_id='regular',
            total_amount=299.0,
            status=RegistrationStatus.APPROVED,
            payment_status=PaymentStatus.PAID,
            invitation_code='INV-002',
            registration_date=datetime(2024, 1, 14, 14, 20, tzinfo=timezone.utc),
        ),
        Registration(
            id='3',
            event_id=FIXTURE_EVENT_ID,
            attendee_info=AttendeeInfo(
                email='michael.chen@skincare.com',
                first_name='Michael',
                last_name='Chen',
                phone='+1-555-0789',
                company='Chen Skincare Solutions',
                title='Dermatologist',
            ),
            pricing_id='regular',
            total_amount=299.0,
            status=RegistrationStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            invitation_code='INV-003',
            registration_date=datetime(2024, 1, 16, 9, 15, tzinfo=timezone.utc),
        ),
    ]
