from datetime import datetime, timezone
from typing import Optional

import attrs

from src.service.event_registration.domain.enum.registration_status import (
    PaymentStatus,
    RegistrationStatus,
)
from src.service.event_registration.domain.registration_error import ValidationError
from src.service.event_registration.domain.value_object.attendee_info import AttendeeInfo


@attrs.define
class Registration:
    id: str
    event_id: str
    attendee_info: AttendeeInfo
    status: RegistrationStatus
    payment_status: PaymentStatus
    invitation_code: str
    registration_date: datetime
    total_amount: float = 0.0
    pricing_id: Optional[str] = None
    rejection_reason: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def attendee_email(self) -> str:
        return self.attendee_info.email

    @classmethod
    def create(
        cls,
        *,
        id: str,
        event_id: str,
        attendee_info: AttendeeInfo,
        invitation_code: str,
        requires_approval: bool,
        total_amount: float = 0.0,
        pricing_id: Optional[str] = None,
    ) -> 'Registration':
        if not event_id or not event_id.strip():
            raise ValidationError()
        if total_amount < 0:
            raise ValidationError('totalAmount cannot be negative')

        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            event_id=event_id,
            attendee_info=attendee_info,
            status=RegistrationStatus.PENDING if requires_approval else RegistrationStatus.APPROVED,
            payment_status=PaymentStatus.PENDING if total_amount > 0 else PaymentStatus.PAID,
            invitation_code=invitation_code,
            registration_date=now,
            total_amount=total_amount,
            pricing_id=pricing_id,
            updated_at=now,
        )

    def with_status(
        self, *, status: RegistrationStatus, rejection_reason: Optional[str] = None
    ) -> 'Registration':
        """Copy with the new status; the reason is kept only for rejections."""
        return attrs.evolve(
            self,
            status=status,
            rejection_reason=rejection_reason if status == RegistrationStatus.REJECTED else None,
            updated_at=datetime.now(timezone.utc),
        )
