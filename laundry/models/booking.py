"""
Pass bookings and the temporary locks held while a resident books.

A (date, pass_schedule) cell holds at most one booking and at most one
lock row; the unique constraints below enforce it.
"""

from datetime import date as Date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date as SQLDate, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from laundry.models.base import BaseModel
from laundry.models.pass_schedule import PassSchedule

if TYPE_CHECKING:
    from laundry.models.person import Account

__all__ = ["PassBooking", "PassLock"]


class PassBooking(BaseModel):
    """A confirmed booking of one pass on one date."""

    __tablename__ = "pass_booking"
    __table_args__ = (
        UniqueConstraint("date", "pass_schedule_id", name="uq_pass_booking_cell"),
        Index("ix_pass_booking_account_date", "account_id", "date"),
    )

    date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    account_id: Mapped[int] = mapped_column(ForeignKey("account.id"), nullable=False)
    pass_schedule_id: Mapped[int] = mapped_column(
        ForeignKey("pass_schedule.id"), nullable=False
    )

    account: Mapped["Account"] = relationship(back_populates="bookings")
    pass_schedule: Mapped["PassSchedule"] = relationship()


class PassLock(BaseModel):
    """
    A temporary hold on a cell. Liveness is derived from ``lock_start``
    and the configured lock duration; expired rows are purged lazily.
    """

    __tablename__ = "pass_lock"
    __table_args__ = (
        UniqueConstraint("pass_date", "pass_schedule_id", name="uq_pass_lock_cell"),
    )

    lock_start: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    pass_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("account.id"), nullable=False, unique=True
    )
    pass_schedule_id: Mapped[int] = mapped_column(
        ForeignKey("pass_schedule.id"), nullable=False
    )

    account: Mapped["Account"] = relationship(back_populates="locks")
    pass_schedule: Mapped["PassSchedule"] = relationship()
