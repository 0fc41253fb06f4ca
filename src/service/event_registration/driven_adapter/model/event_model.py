from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class EventModel(Base):
    __tablename__ = 'event'
    __table_args__ = (
        CheckConstraint('capacity_total > 0', name='ck_event_capacity_total_positive'),
        CheckConstraint(
            'capacity_reserved >= 0 AND capacity_reserved <= capacity_total',
            name='ck_event_capacity_reserved_bounds',
        ),
        CheckConstraint(
            'capacity_reserved + capacity_available = capacity_total',
            name='ck_event_capacity_balanced',
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID7 string
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='draft', nullable=False)
    requires_approval: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    capacity_total: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity_reserved: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    capacity_available: Mapped[int] = mapped_column(Integer, nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
