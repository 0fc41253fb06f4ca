import attrs

from src.platform.exception.exceptions import DomainError
from src.service.event_registration.domain.registration_error import (
    CapacityBelowReservedError,
    EventFullError,
)


@attrs.define(frozen=True)
class EventCapacity:
    """
    Seat counters of one event.

    ``available`` is derived from ``total`` and ``reserved`` so the pair
    ``reserved + available == total`` cannot drift; stores persist all three
    but always from one instance of this class.
    """

    total: int
    reserved: int = 0

    def __attrs_post_init__(self) -> None:
        if self.total < 1:
            raise DomainError('Capacity total must be a positive integer')
        if not 0 <= self.reserved <= self.total:
            raise DomainError(
                f'Reserved seats must be between 0 and {self.total}, got {self.reserved}'
            )

    @property
    def available(self) -> int:
        return self.total - self.reserved

    @property
    def is_full(self) -> bool:
        return self.reserved >= self.total

    def reserve(self) -> 'EventCapacity':
        if self.is_full:
            raise EventFullError()
        return attrs.evolve(self, reserved=self.reserved + 1)

    def release(self) -> 'EventCapacity':
        # Clamped at zero; releasing an empty ledger is a no-op
        return attrs.evolve(self, reserved=max(0, self.reserved - 1))

    def resize(self, *, total: int) -> 'EventCapacity':
        if total < self.reserved:
            raise CapacityBelowReservedError(total=total, reserved=self.reserved)
        return attrs.evolve(self, total=total)

    def to_dict(self) -> dict[str, int]:
        return {'total': self.total, 'reserved': self.reserved, 'available': self.available}


@attrs.define(frozen=True)
class CapacitySnapshot:
    """Capacity as read from the store, tagged with the version it was read at."""

    capacity: EventCapacity
    version: int
