"""
Concurrency tests for the registration workflow

Requests are interleaved on one event loop against the in-memory store,
which yields at every store call. After each run the seat counters must
match the number of pending/approved registrations exactly.
"""

import asyncio

import pytest

from src.service.event_registration.app.command.create_registration_use_case import (
    CreateRegistrationUseCase,
)
from src.service.event_registration.app.command.delete_registration_use_case import (
    DeleteRegistrationUseCase,
)
from src.service.event_registration.app.command.update_registration_status_use_case import (
    UpdateRegistrationStatusUseCase,
)
from src.service.event_registration.app.service.capacity_ledger import CapacityLedger
from src.service.event_registration.domain.entity.registration_entity import Registration
from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.domain.registration_error import (
    CapacityConflictError,
    DuplicateRegistrationError,
    EventFullError,
    InvalidTransitionError,
    RegistrationNotFoundError,
)
from src.service.event_registration.domain.value_object.attendee_info import AttendeeInfo
from src.service.event_registration.driven_adapter.memory.in_memory_document_store import (
    InMemoryDocumentStore,
)
from src.service.event_registration.driven_adapter.memory.in_memory_unit_of_work import (
    InMemoryUnitOfWork,
)
from test.shared.utils import (
    build_registration,
    reserved_seats,
    seat_holding_count,
    seed_event,
)
from test.util_constant import ATTENDEE_EMAIL


@pytest.fixture
def create_use_case(
    uow: InMemoryUnitOfWork, capacity_ledger: CapacityLedger
) -> CreateRegistrationUseCase:
    return CreateRegistrationUseCase(uow=uow, capacity_ledger=capacity_ledger)


@pytest.fixture
def status_use_case(
    uow: InMemoryUnitOfWork, capacity_ledger: CapacityLedger
) -> UpdateRegistrationStatusUseCase:
    return UpdateRegistrationStatusUseCase(uow=uow, capacity_ledger=capacity_ledger)


@pytest.fixture
def delete_use_case(
    uow: InMemoryUnitOfWork, capacity_ledger: CapacityLedger
) -> DeleteRegistrationUseCase:
    return DeleteRegistrationUseCase(uow=uow, capacity_ledger=capacity_ledger)


async def _set_status(
    use_case: UpdateRegistrationStatusUseCase, registration: Registration, status: str
) -> Registration:
    return await use_case.execute(registration_id=registration.id, status=status)


async def _assert_counters_consistent(store: InMemoryDocumentStore) -> None:
    snapshot = await store.get_capacity(event_id='event-1')
    assert snapshot is not None
    capacity = snapshot.capacity
    assert capacity.reserved + capacity.available == capacity.total
    assert capacity.reserved == await seat_holding_count(store)


@pytest.mark.unit
class TestRegistrationConcurrency:
    @pytest.mark.asyncio
    async def test_last_seat_goes_to_exactly_one_attendee(
        self, create_use_case: CreateRegistrationUseCase, document_store: InMemoryDocumentStore
    ) -> None:
        # Given: one seat, twenty different attendees
        seed_event(document_store, total=1)

        # When
        results = await asyncio.gather(
            *(
                create_use_case.execute(
                    event_id='event-1', attendee_info=AttendeeInfo(email=f'user{i}@clinic.com')
                )
                for i in range(20)
            ),
            return_exceptions=True,
        )

        # Then
        winners = [r for r in results if isinstance(r, Registration)]
        losers = [r for r in results if isinstance(r, Exception)]
        assert len(winners) == 1
        assert all(isinstance(e, EventFullError) for e in losers)
        assert await reserved_seats(document_store) == 1
        await _assert_counters_consistent(document_store)

    @pytest.mark.asyncio
    async def test_same_attendee_submitted_concurrently(
        self, create_use_case: CreateRegistrationUseCase, document_store: InMemoryDocumentStore
    ) -> None:
        # Given: plenty of seats, the same attendee submits ten times at once
        seed_event(document_store, total=50)

        # When
        results = await asyncio.gather(
            *(
                create_use_case.execute(
                    event_id='event-1', attendee_info=AttendeeInfo(email=ATTENDEE_EMAIL)
                )
                for _ in range(10)
            ),
            return_exceptions=True,
        )

        # Then: one registration, one seat; the losers released what they took
        winners = [r for r in results if isinstance(r, Registration)]
        losers = [r for r in results if isinstance(r, Exception)]
        assert len(winners) == 1
        assert all(isinstance(e, DuplicateRegistrationError) for e in losers)
        assert await reserved_seats(document_store) == 1
        await _assert_counters_consistent(document_store)

    @pytest.mark.asyncio
    async def test_concurrent_approve_and_reject(
        self,
        create_use_case: CreateRegistrationUseCase,
        status_use_case: UpdateRegistrationStatusUseCase,
        document_store: InMemoryDocumentStore,
    ) -> None:
        # Given: a pending registration
        seed_event(document_store, total=2)
        registration = await create_use_case.execute(
            event_id='event-1', attendee_info=AttendeeInfo(email=ATTENDEE_EMAIL)
        )

        # When: approve and reject race
        results = await asyncio.gather(
            status_use_case.execute(registration_id=registration.id, status='approved'),
            status_use_case.execute(registration_id=registration.id, status='rejected'),
            return_exceptions=True,
        )

        # Then: the final status agrees with the counters whichever order won
        failures = [r for r in results if isinstance(r, Exception)]
        assert all(isinstance(e, InvalidTransitionError) for e in failures)
        stored = await document_store.get_registration(registration_id=registration.id)
        assert stored is not None
        expected_reserved = 1 if stored.status == RegistrationStatus.APPROVED else 0
        assert await reserved_seats(document_store) == expected_reserved
        await _assert_counters_consistent(document_store)

    @pytest.mark.asyncio
    async def test_concurrent_cancels_release_once(
        self,
        create_use_case: CreateRegistrationUseCase,
        status_use_case: UpdateRegistrationStatusUseCase,
        document_store: InMemoryDocumentStore,
    ) -> None:
        # Given: two attendees, so a double release would show up as reserved == 0
        seed_event(document_store, total=3)
        target = await create_use_case.execute(
            event_id='event-1', attendee_info=AttendeeInfo(email=ATTENDEE_EMAIL)
        )
        await create_use_case.execute(
            event_id='event-1', attendee_info=AttendeeInfo(email='other@clinic.com')
        )

        # When
        results = await asyncio.gather(
            *(
                status_use_case.execute(registration_id=target.id, status='cancelled')
                for _ in range(5)
            ),
            return_exceptions=True,
        )

        # Then
        successes = [r for r in results if isinstance(r, Registration)]
        assert len(successes) == 1
        assert await reserved_seats(document_store) == 1
        await _assert_counters_consistent(document_store)

    @pytest.mark.asyncio
    async def test_concurrent_deletes_release_once(
        self,
        create_use_case: CreateRegistrationUseCase,
        delete_use_case: DeleteRegistrationUseCase,
        document_store: InMemoryDocumentStore,
    ) -> None:
        seed_event(document_store, total=3)
        target = await create_use_case.execute(
            event_id='event-1', attendee_info=AttendeeInfo(email=ATTENDEE_EMAIL)
        )
        await create_use_case.execute(
            event_id='event-1', attendee_info=AttendeeInfo(email='other@clinic.com')
        )

        results = await asyncio.gather(
            *(delete_use_case.execute(registration_id=target.id) for _ in range(5)),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 4
        assert all(isinstance(e, RegistrationNotFoundError) for e in failures)
        assert await reserved_seats(document_store) == 1
        await _assert_counters_consistent(document_store)

    @pytest.mark.asyncio
    async def test_mixed_workload_keeps_counters_consistent(
        self,
        create_use_case: CreateRegistrationUseCase,
        status_use_case: UpdateRegistrationStatusUseCase,
        delete_use_case: DeleteRegistrationUseCase,
        document_store: InMemoryDocumentStore,
    ) -> None:
        # Given: ten existing registrations on a twelve-seat event
        seed_event(document_store, total=12)
        existing = [
            await create_use_case.execute(
                event_id='event-1', attendee_info=AttendeeInfo(email=f'seed{i}@clinic.com')
            )
            for i in range(10)
        ]

        # When: new registrations race approvals, rejections and deletes
        operations = [
            *(
                create_use_case.execute(
                    event_id='event-1', attendee_info=AttendeeInfo(email=f'new{i}@clinic.com')
                )
                for i in range(6)
            ),
            *(_set_status(status_use_case, r, 'approved') for r in existing[:4]),
            *(_set_status(status_use_case, r, 'rejected') for r in existing[2:6]),
            *(delete_use_case.execute(registration_id=r.id) for r in existing[5:8]),
            *(_set_status(status_use_case, r, 'cancelled') for r in existing[7:]),
        ]
        results = await asyncio.gather(*operations, return_exceptions=True)

        # Then: only expected business errors, and the ledger matches the registrations
        expected_errors = (
            EventFullError,
            InvalidTransitionError,
            RegistrationNotFoundError,
        )
        unexpected = [
            r for r in results if isinstance(r, Exception) and not isinstance(r, expected_errors)
        ]
        assert unexpected == []
        await _assert_counters_consistent(document_store)


@pytest.mark.unit
class TestExhaustedReleaseRetries:
    """A release that runs out of retries must not leave a freed registration holding a seat"""

    @pytest.fixture
    def impatient_ledger(self) -> CapacityLedger:
        return CapacityLedger(max_attempts=1, backoff_base_seconds=0, backoff_max_seconds=0)

    @pytest.fixture
    def seeded_registrations(self, document_store: InMemoryDocumentStore) -> list[Registration]:
        # Given: a full event, every seat held by a pending registration
        seed_event(document_store, total=30, reserved=30)
        registrations = [
            build_registration(registration_id=f'r{i}', email=f'attendee{i}@clinic.com')
            for i in range(30)
        ]
        document_store.seed(events=[], registrations=registrations)
        return registrations

    @pytest.mark.asyncio
    async def test_concurrent_cancels_with_exhausted_retries(
        self,
        uow: InMemoryUnitOfWork,
        impatient_ledger: CapacityLedger,
        document_store: InMemoryDocumentStore,
        seeded_registrations: list[Registration],
    ) -> None:
        use_case = UpdateRegistrationStatusUseCase(uow=uow, capacity_ledger=impatient_ledger)

        # When
        results = await asyncio.gather(
            *(_set_status(use_case, r, 'cancelled') for r in seeded_registrations),
            return_exceptions=True,
        )

        # Then: losers are reported and put back to pending with their seat
        failures = [r for r in results if isinstance(r, Exception)]
        assert failures
        assert all(isinstance(e, CapacityConflictError) for e in failures)
        assert await seat_holding_count(document_store) == len(failures)
        await _assert_counters_consistent(document_store)

    @pytest.mark.asyncio
    async def test_concurrent_deletes_with_exhausted_retries(
        self,
        uow: InMemoryUnitOfWork,
        impatient_ledger: CapacityLedger,
        document_store: InMemoryDocumentStore,
        seeded_registrations: list[Registration],
    ) -> None:
        use_case = DeleteRegistrationUseCase(uow=uow, capacity_ledger=impatient_ledger)

        results = await asyncio.gather(
            *(use_case.execute(registration_id=r.id) for r in seeded_registrations),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert failures
        assert all(isinstance(e, CapacityConflictError) for e in failures)
        assert await document_store.count_registrations(event_id='event-1') == len(failures)
        await _assert_counters_consistent(document_store)
