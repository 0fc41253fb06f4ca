from datetime import datetime, timezone
from typing import Any, Optional

from fastapi.testclient import TestClient

from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.event_status import EventStatus
from src.service.event_registration.domain.enum.registration_status import (
    PaymentStatus,
    RegistrationStatus,
)
from src.service.event_registration.domain.value_object.attendee_info import AttendeeInfo
from src.service.event_registration.domain.value_object.event_capacity import EventCapacity
from src.service.event_registration.driven_adapter.memory.in_memory_document_store import (
    InMemoryDocumentStore,
)
from test.util_constant import EVENT_TITLE, EVENTS_URL, REGISTRATIONS_URL


def build_event(
    *,
    event_id: str = 'event-1',
    total: int = 10,
    reserved: int = 0,
    requires_approval: bool = True,
) -> EventEntity:
    now = datetime.now(timezone.utc)
    return EventEntity(
        id=event_id,
        title=EVENT_TITLE,
        capacity=EventCapacity(total=total, reserved=reserved),
        requires_approval=requires_approval,
        status=EventStatus.PUBLISHED,
        created_at=now,
        updated_at=now,
    )


def build_registration(
    *,
    registration_id: str,
    event_id: str = 'event-1',
    email: str,
    status: RegistrationStatus = RegistrationStatus.PENDING,
) -> Registration:
    return Registration(
        id=registration_id,
        event_id=event_id,
        attendee_info=AttendeeInfo(email=email),
        status=status,
        payment_status=PaymentStatus.PAID,
        invitation_code=f'INV-{registration_id}',
        registration_date=datetime.now(timezone.utc),
    )


def seed_event(store: InMemoryDocumentStore, **kwargs: Any) -> EventEntity:
    event = build_event(**kwargs)
    store.seed(events=[event])
    return event


async def reserved_seats(store: InMemoryDocumentStore, *, event_id: str = 'event-1') -> int:
    snapshot = await store.get_capacity(event_id=event_id)
    assert snapshot is not None
    return snapshot.capacity.reserved


async def seat_holding_count(store: InMemoryDocumentStore, *, event_id: str = 'event-1') -> int:
    return await store.count_registrations(
        event_id=event_id,
        statuses=frozenset({RegistrationStatus.PENDING, RegistrationStatus.APPROVED}),
    )


# ---------- HTTP helpers ----------


def create_event(
    client: TestClient,
    *,
    total: Optional[int] = 10,
    requires_approval: bool = True,
    title: str = EVENT_TITLE,
) -> dict[str, Any]:
    payload: dict[str, Any] = {'title': title, 'requiresApproval': requires_approval}
    if total is not None:
        payload['capacity'] = {'total': total}
    response = client.post(EVENTS_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()['event']


def register(client: TestClient, *, event_id: str, email: str, **extra: Any) -> Any:
    payload = {'eventId': event_id, 'attendeeInfo': {'email': email, 'firstName': 'Jane'}}
    payload.update(extra)
    return client.post(REGISTRATIONS_URL, json=payload)


def get_capacity(client: TestClient, *, event_id: str) -> dict[str, int]:
    response = client.get(f'{EVENTS_URL}/{event_id}')
    assert response.status_code == 200, response.text
    return response.json()['event']['capacity']
