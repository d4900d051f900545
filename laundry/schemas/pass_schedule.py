"""
Weekly pass schedule schemas.

A schedule holds one entry per room; each room holds seven days and each
day one slot per configured pass range.
"""

from typing import List, Optional

from pydantic import Field, field_validator

from laundry.models.enums import SlotStatus
from laundry.schemas.common.base import BaseSchema
from laundry.schemas.status_codes import ScheduleStatusCode
from laundry.utils.validators import is_date_string, is_pass_range, is_username

__all__ = ["PassSlot", "PassDTO", "RoomPasses", "PassScheduleDTO"]


class PassSlot(BaseSchema):
    range: str
    status: SlotStatus = SlotStatus.AVAILABLE
    username: str = ""

    @field_validator("range")
    @classmethod
    def validate_range(cls, v: str) -> str:
        if not is_pass_range(v):
            raise ValueError("range must follow the format HH-HH")
        return v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if v and not is_username(v):
            raise ValueError("username must consist of letters and numbers only")
        return v


class PassDTO(BaseSchema):
    """All slots of one room on one day."""

    date: str
    slots: List[PassSlot] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        if not is_date_string(v):
            raise ValueError("date should be formatted correctly, example (YYYY-MM-DD)")
        return v

    def slot(self, pass_range: str) -> Optional[PassSlot]:
        for candidate in self.slots:
            if candidate.range == pass_range:
                return candidate
        return None


class RoomPasses(BaseSchema):
    room_num: int = Field(..., ge=0)
    passes: List[PassDTO] = Field(default_factory=list)

    def day(self, date: str) -> Optional[PassDTO]:
        for candidate in self.passes:
            if candidate.date == date:
                return candidate
        return None


class PassScheduleDTO(BaseSchema):
    week_number: Optional[int] = Field(default=None, ge=0)
    room_count: Optional[int] = Field(default=None, ge=0)
    week_start_date: Optional[str] = None
    week_end_date: Optional[str] = None
    room_passes: List[RoomPasses] = Field(default_factory=list)
    status_code: ScheduleStatusCode = ScheduleStatusCode.OK

    @field_validator("week_start_date", "week_end_date")
    @classmethod
    def validate_dates(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_date_string(v):
            raise ValueError("date should be formatted correctly, example (YYYY-MM-DD)")
        return v

    @classmethod
    def rejected(cls, status_code: ScheduleStatusCode) -> "PassScheduleDTO":
        return cls(status_code=status_code)

    def room(self, room_num: int) -> Optional[RoomPasses]:
        for candidate in self.room_passes:
            if candidate.room_num == room_num:
                return candidate
        return None

    def find_slot(self, room_num: int, date: str, pass_range: str) -> Optional[PassSlot]:
        """Locate a slot by cell coordinates; ``None`` if it is not in this schedule."""
        room = self.room(room_num)
        day = room.day(date) if room else None
        return day.slot(pass_range) if day else None

    def iter_slots(self):
        for room in self.room_passes:
            for day in room.passes:
                yield from day.slots
