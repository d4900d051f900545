"""
Static pass configuration: the time ranges and which rooms offer them.
"""

from typing import List

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from laundry.models.base import BaseModel

__all__ = ["Pass", "PassSchedule"]


class Pass(BaseModel):
    """A daily time range, 'HH-HH'."""

    __tablename__ = "pass"

    range: Mapped[str] = mapped_column(String(5), nullable=False, unique=True)

    schedules: Mapped[List["PassSchedule"]] = relationship(back_populates="pass_")


class PassSchedule(BaseModel):
    """One bookable (room, range) pair."""

    __tablename__ = "pass_schedule"
    __table_args__ = (
        UniqueConstraint("room", "pass_id", name="uq_pass_schedule_room_pass"),
    )

    room: Mapped[int] = mapped_column(Integer, nullable=False)
    pass_id: Mapped[int] = mapped_column(ForeignKey("pass.id"), nullable=False)

    pass_: Mapped["Pass"] = relationship(back_populates="schedules")
