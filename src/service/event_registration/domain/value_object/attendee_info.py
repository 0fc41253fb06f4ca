from typing import Optional

import attrs

from src.service.event_registration.domain.registration_error import ValidationError


def normalize_email(email: str) -> str:
    return email.strip().lower()


@attrs.define(frozen=True)
class AttendeeInfo:
    email: str = attrs.field(converter=lambda v: normalize_email(v or ''))
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None

    @email.validator
    def _check_email(self, attribute: attrs.Attribute, value: str) -> None:
        if not value:
            raise ValidationError()

    def to_dict(self) -> dict[str, Optional[str]]:
        return attrs.asdict(self)
