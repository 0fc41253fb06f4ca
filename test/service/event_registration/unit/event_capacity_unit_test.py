import pytest

from src.platform.exception.exceptions import DomainError
from src.service.event_registration.domain.registration_error import (
    CapacityBelowReservedError,
    EventFullError,
)
from src.service.event_registration.domain.value_object.event_capacity import EventCapacity


@pytest.mark.unit
class TestEventCapacity:
    def test_available_is_total_minus_reserved(self) -> None:
        capacity = EventCapacity(total=50, reserved=3)

        assert capacity.available == 47
        assert capacity.to_dict() == {'total': 50, 'reserved': 3, 'available': 47}

    @pytest.mark.parametrize('total', [0, -1])
    def test_total_must_be_positive(self, total: int) -> None:
        with pytest.raises(DomainError):
            EventCapacity(total=total)

    @pytest.mark.parametrize('reserved', [-1, 11])
    def test_reserved_must_stay_within_total(self, reserved: int) -> None:
        with pytest.raises(DomainError):
            EventCapacity(total=10, reserved=reserved)

    def test_reserve_takes_one_seat(self) -> None:
        capacity = EventCapacity(total=2)

        updated = capacity.reserve()

        assert updated.reserved == 1
        assert updated.available == 1
        # Value object is immutable
        assert capacity.reserved == 0

    def test_reserve_on_full_event_raises(self) -> None:
        # Given: every seat taken
        capacity = EventCapacity(total=1, reserved=1)

        # Then
        assert capacity.is_full
        with pytest.raises(EventFullError) as exc_info:
            capacity.reserve()
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == 'Event is full'

    def test_release_returns_one_seat(self) -> None:
        assert EventCapacity(total=5, reserved=2).release().reserved == 1

    def test_release_on_empty_ledger_is_clamped(self) -> None:
        capacity = EventCapacity(total=5, reserved=0)

        assert capacity.release() == capacity

    def test_resize_keeps_reserved(self) -> None:
        updated = EventCapacity(total=5, reserved=3).resize(total=8)

        assert updated == EventCapacity(total=8, reserved=3)
        assert updated.available == 5

    def test_resize_down_to_reserved_is_allowed(self) -> None:
        assert EventCapacity(total=5, reserved=3).resize(total=3).is_full

    def test_resize_below_reserved_raises(self) -> None:
        with pytest.raises(CapacityBelowReservedError):
            EventCapacity(total=5, reserved=3).resize(total=2)
