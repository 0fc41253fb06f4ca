"""
Integration tests against PostgreSQL

Exercise the SQLAlchemy repositories through SqlAlchemyUnitOfWork: version
checked capacity writes, unique and foreign-key constraints mapped to domain
errors, and the conditional status update. Skipped when PostgreSQL cannot be
reached.
"""

import asyncio

import pytest

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.event_registration.app.command.create_event_use_case import CreateEventUseCase
from src.service.event_registration.app.command.create_registration_use_case import (
    CreateRegistrationUseCase,
)
from src.service.event_registration.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.event_registration.app.command.delete_registration_use_case import (
    DeleteRegistrationUseCase,
)
from src.service.event_registration.app.command.update_registration_status_use_case import (
    UpdateRegistrationStatusUseCase,
)
from src.service.event_registration.app.query.get_event_use_case import GetEventUseCase
from src.service.event_registration.app.query.list_registrations_use_case import (
    ListRegistrationsUseCase,
)
from src.service.event_registration.app.service.capacity_ledger import CapacityLedger
from src.service.event_registration.domain.entity.event_entity import EventEntity
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.domain.registration_error import (
    DuplicateRegistrationError,
    EventFullError,
    EventHasRegistrationsError,
    InvalidTransitionError,
)
from src.service.event_registration.domain.value_object.attendee_info import AttendeeInfo
from test.util_constant import ANOTHER_ATTENDEE_EMAIL, ATTENDEE_EMAIL, EVENT_TITLE


def _uow() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory=Database().session)


@pytest.fixture
def ledger() -> CapacityLedger:
    return CapacityLedger(max_attempts=50, backoff_base_seconds=0.001, backoff_max_seconds=0.01)


async def _create_event(*, total: int, requires_approval: bool = True) -> EventEntity:
    return await CreateEventUseCase(uow=_uow()).execute(
        title=EVENT_TITLE, total_capacity=total, requires_approval=requires_approval
    )


async def _register(ledger: CapacityLedger, *, event_id: str, email: str) -> Registration:
    return await CreateRegistrationUseCase(uow=_uow(), capacity_ledger=ledger).execute(
        event_id=event_id, attendee_info=AttendeeInfo(email=email)
    )


async def _reserved(event_id: str) -> int:
    event = await GetEventUseCase(uow=_uow()).get_by_id(event_id=event_id)
    return event.capacity.reserved


@pytest.mark.integration
class TestPostgresRegistrationWorkflow:
    @pytest.mark.asyncio
    async def test_register_approve_cancel(self, ledger: CapacityLedger) -> None:
        # Given
        event = await _create_event(total=2)

        # When
        registration = await _register(ledger, event_id=event.id, email=ATTENDEE_EMAIL)
        status_use_case = UpdateRegistrationStatusUseCase(uow=_uow(), capacity_ledger=ledger)
        await status_use_case.execute(registration_id=registration.id, status='approved')

        # Then
        assert await _reserved(event.id) == 1

        # When
        await status_use_case.execute(registration_id=registration.id, status='cancelled')

        # Then
        assert await _reserved(event.id) == 0
        stored = await ListRegistrationsUseCase(uow=_uow()).get_by_id(
            registration_id=registration.id
        )
        assert stored.status == RegistrationStatus.CANCELLED
        assert stored.attendee_info.email == ATTENDEE_EMAIL

    @pytest.mark.asyncio
    async def test_duplicate_and_full(self, ledger: CapacityLedger) -> None:
        event = await _create_event(total=1)
        await _register(ledger, event_id=event.id, email=ATTENDEE_EMAIL)

        with pytest.raises(DuplicateRegistrationError):
            await _register(ledger, event_id=event.id, email=ATTENDEE_EMAIL)
        with pytest.raises(EventFullError):
            await _register(ledger, event_id=event.id, email=ANOTHER_ATTENDEE_EMAIL)

        assert await _reserved(event.id) == 1

    @pytest.mark.asyncio
    async def test_forbidden_transition_rolls_back(self, ledger: CapacityLedger) -> None:
        event = await _create_event(total=2)
        registration = await _register(ledger, event_id=event.id, email=ATTENDEE_EMAIL)
        await UpdateRegistrationStatusUseCase(uow=_uow(), capacity_ledger=ledger).execute(
            registration_id=registration.id, status='approved'
        )

        with pytest.raises(InvalidTransitionError):
            await UpdateRegistrationStatusUseCase(uow=_uow(), capacity_ledger=ledger).execute(
                registration_id=registration.id, status='rejected'
            )

        assert await _reserved(event.id) == 1

    @pytest.mark.asyncio
    async def test_delete_registration_then_event(self, ledger: CapacityLedger) -> None:
        event = await _create_event(total=2)
        registration = await _register(ledger, event_id=event.id, email=ATTENDEE_EMAIL)

        with pytest.raises(EventHasRegistrationsError):
            await DeleteEventUseCase(uow=_uow()).execute(event_id=event.id)

        removed = await DeleteRegistrationUseCase(uow=_uow(), capacity_ledger=ledger).execute(
            registration_id=registration.id
        )
        assert removed.id == registration.id
        assert await _reserved(event.id) == 0

        await DeleteEventUseCase(uow=_uow()).execute(event_id=event.id)


@pytest.mark.integration
class TestPostgresConcurrency:
    @pytest.mark.asyncio
    async def test_last_seat_goes_to_exactly_one_attendee(self, ledger: CapacityLedger) -> None:
        # Given
        event = await _create_event(total=1)

        # When: each request has its own session
        results = await asyncio.gather(
            *(_register(ledger, event_id=event.id, email=f'user{i}@clinic.com') for i in range(8)),
            return_exceptions=True,
        )

        # Then
        winners = [r for r in results if isinstance(r, Registration)]
        assert len(winners) == 1
        assert all(isinstance(r, (Registration, EventFullError)) for r in results)
        assert await _reserved(event.id) == 1

    @pytest.mark.asyncio
    async def test_same_attendee_submitted_concurrently(self, ledger: CapacityLedger) -> None:
        event = await _create_event(total=10)

        results = await asyncio.gather(
            *(_register(ledger, event_id=event.id, email=ATTENDEE_EMAIL) for _ in range(5)),
            return_exceptions=True,
        )

        winners = [r for r in results if isinstance(r, Registration)]
        assert len(winners) == 1
        assert all(isinstance(r, (Registration, DuplicateRegistrationError)) for r in results)
        assert await _reserved(event.id) == 1
