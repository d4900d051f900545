"""
Booking result schema.
"""

from typing import Optional

from pydantic import Field, field_validator

from laundry.schemas.common.base import BaseSchema
from laundry.schemas.status_codes import BookingStatusCode
from laundry.utils.validators import is_date_string, is_pass_range

__all__ = ["BookingDTO"]


class BookingDTO(BaseSchema):
    """
    Outcome of a booking operation.

    On success the booked cell is echoed back; on a rejection only
    ``status_code`` is set.
    """

    date: Optional[str] = Field(default=None, description="Pass date, YYYY-MM-DD")
    room_number: Optional[int] = Field(default=None, ge=0)
    pass_range: Optional[str] = Field(default=None, description="Pass range, HH-HH")
    status_code: BookingStatusCode

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_date_string(v):
            raise ValueError("date should be formatted correctly, example (YYYY-MM-DD)")
        return v

    @field_validator("pass_range")
    @classmethod
    def validate_pass_range(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_pass_range(v):
            raise ValueError("pass range must follow the format HH-HH")
        return v

    @classmethod
    def rejected(cls, status_code: BookingStatusCode) -> "BookingDTO":
        return cls(status_code=status_code)
