from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


UQ_REGISTRATION_EVENT_EMAIL = 'uq_registration_event_email'
UQ_REGISTRATION_INVITATION_CODE = 'uq_registration_invitation_code'
FK_REGISTRATION_EVENT = 'fk_registration_event'


class RegistrationModel(Base):
    __tablename__ = 'registration'
    __table_args__ = (
        UniqueConstraint('event_id', 'attendee_email', name=UQ_REGISTRATION_EVENT_EMAIL),
        UniqueConstraint('invitation_code', name=UQ_REGISTRATION_INVITATION_CODE),
        Index('ix_registration_event_status', 'event_id', 'status'),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID7 string
    event_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey('event.id', ondelete='RESTRICT', name=FK_REGISTRATION_EVENT),
        nullable=False,
    )
    attendee_email: Mapped[str] = mapped_column(String(320), nullable=False)
    attendee_info: Mapped[dict] = mapped_column(JSONB, nullable=False)
    pricing_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    total_amount: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False)
    invitation_code: Mapped[str] = mapped_column(String(32), nullable=False)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    registration_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
