"""
Registration status transitions and their effect on the capacity ledger.

Both tables are exhaustive: every (current, requested) pair and every status
has exactly one entry, so the seat accounting for any move can be read off
here instead of being implied by branch order.
"""

from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

from src.service.event_registration.domain.enum.registration_status import RegistrationStatus
from src.service.event_registration.domain.registration_error import (
    InvalidStatusError,
    InvalidTransitionError,
)


class LedgerEffect(StrEnum):
    KEEP_SEAT = 'keep_seat'
    RELEASE_SEAT = 'release_seat'
    FORBIDDEN = 'forbidden'


_S = RegistrationStatus
_E = LedgerEffect

# Statuses an operator may request through set_status
REQUESTABLE_STATUSES: frozenset[RegistrationStatus] = frozenset(
    {_S.APPROVED, _S.REJECTED, _S.CANCELLED}
)

STATUS_TRANSITIONS: Mapping[tuple[RegistrationStatus, RegistrationStatus], LedgerEffect] = (
    MappingProxyType(
        {
            (_S.PENDING, _S.APPROVED): _E.KEEP_SEAT,
            (_S.PENDING, _S.REJECTED): _E.RELEASE_SEAT,
            (_S.PENDING, _S.CANCELLED): _E.RELEASE_SEAT,
            (_S.APPROVED, _S.APPROVED): _E.FORBIDDEN,
            (_S.APPROVED, _S.REJECTED): _E.FORBIDDEN,  # approved seats are cancelled, not rejected
            (_S.APPROVED, _S.CANCELLED): _E.RELEASE_SEAT,
            (_S.REJECTED, _S.APPROVED): _E.FORBIDDEN,
            (_S.REJECTED, _S.REJECTED): _E.FORBIDDEN,
            (_S.REJECTED, _S.CANCELLED): _E.FORBIDDEN,
            (_S.CANCELLED, _S.APPROVED): _E.FORBIDDEN,
            (_S.CANCELLED, _S.REJECTED): _E.FORBIDDEN,
            (_S.CANCELLED, _S.CANCELLED): _E.FORBIDDEN,
        }
    )
)

DELETE_EFFECTS: Mapping[RegistrationStatus, LedgerEffect] = MappingProxyType(
    {
        _S.PENDING: _E.RELEASE_SEAT,
        _S.APPROVED: _E.RELEASE_SEAT,
        _S.REJECTED: _E.KEEP_SEAT,
        _S.CANCELLED: _E.KEEP_SEAT,
    }
)


def parse_requested_status(value: str) -> RegistrationStatus:
    try:
        status = RegistrationStatus(value)
    except ValueError:
        raise InvalidStatusError() from None
    if status not in REQUESTABLE_STATUSES:
        raise InvalidStatusError()
    return status


def resolve_transition(
    *, current: RegistrationStatus, requested: RegistrationStatus
) -> LedgerEffect:
    effect = STATUS_TRANSITIONS.get((current, requested))
    if effect is None:
        raise InvalidStatusError()
    if effect is LedgerEffect.FORBIDDEN:
        raise InvalidTransitionError(current=current.value, requested=requested.value)
    return effect


def resolve_delete(*, current: RegistrationStatus) -> LedgerEffect:
    return DELETE_EFFECTS[current]
