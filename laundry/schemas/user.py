"""
User and account schemas.
"""

from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from laundry.models.enums import Privilege
from laundry.schemas.common.base import BaseSchema
from laundry.schemas.status_codes import UserInfoStatusCode, UserStatusCode
from laundry.utils.validators import is_name, is_personal_number, is_username

__all__ = ["UserDTO", "RegisterDTO", "ResidentInfo", "UserInfoDTO"]


class UserDTO(BaseSchema):
    """Outcome of a login or registration."""

    username: Optional[str] = None
    privilege_id: Privilege = Privilege.INVALID
    status_code: UserStatusCode

    @classmethod
    def rejected(cls, status_code: UserStatusCode) -> "UserDTO":
        return cls(status_code=status_code)


class RegisterDTO(BaseSchema):
    """Details of a new person and account."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    personal_number: str
    email: EmailStr
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=8, max_length=32)

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not is_name(v):
            raise ValueError("names must consist of letters")
        return v

    @field_validator("personal_number")
    @classmethod
    def validate_personal_number(cls, v: str) -> str:
        if not is_personal_number(v):
            raise ValueError("personal number should be formatted correctly, example (YYYYMMDD-XXXX)")
        return v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not is_username(v):
            raise ValueError("username must consist of letters and numbers only")
        return v


class ResidentInfo(BaseSchema):
    first_name: str
    last_name: str
    personal_number: str
    username: str


class UserInfoDTO(BaseSchema):
    person_info: List[ResidentInfo] = Field(default_factory=list)
    status_code: UserInfoStatusCode
