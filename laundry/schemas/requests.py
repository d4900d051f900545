"""
Request bodies accepted by the HTTP API.
"""

from pydantic import Field, field_validator

from laundry.schemas.common.base import BaseSchema
from laundry.utils.validators import is_date_string, is_pass_range, is_username

__all__ = ["LoginRequest", "PassRequest", "DeleteUserRequest"]


class LoginRequest(BaseSchema):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class PassRequest(BaseSchema):
    """Cell coordinates for lock, book and cancel requests."""

    room_number: int = Field(..., ge=1)
    date: str
    pass_range: str

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        if not is_date_string(v):
            raise ValueError("date should be formatted correctly, example (YYYY-MM-DD)")
        return v

    @field_validator("pass_range")
    @classmethod
    def validate_pass_range(cls, v: str) -> str:
        if not is_pass_range(v):
            raise ValueError("pass range must follow the format HH-HH")
        return v


class DeleteUserRequest(BaseSchema):
    username: str = Field(..., min_length=1, max_length=64)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not is_username(v):
            raise ValueError("username must consist of letters and numbers only")
        return v
