"""
Per-operation status codes carried by the DTOs.

Business outcomes are reported through these codes and never raised.
"""

from enum import IntEnum

__all__ = [
    "BookingStatusCode",
    "UserStatusCode",
    "UserInfoStatusCode",
    "ScheduleStatusCode",
]


class BookingStatusCode(IntEnum):
    OK = 0
    INVALID_USER = 1
    INVALID_PASS_INFO = 2
    EXISTENT_ACTIVE_PASS = 3
    PASS_COUNT_EXCEEDED = 4
    BOOKED_PASS = 5
    LOCKED_PASS = 6
    INVALID_DATE = 7
    NO_BOOKING = 8


class UserStatusCode(IntEnum):
    OK = 0
    LOGIN_FAILURE = 1
    EXISTENT_EMAIL = 2
    EXISTENT_USERNAME = 3
    INVALID_PRIVILEGE = 4
    INVALID_USER = 5


class UserInfoStatusCode(IntEnum):
    OK = 0
    INVALID_USER = 1
    INVALID_PRIVILEGE = 2


class ScheduleStatusCode(IntEnum):
    OK = 0
    INVALID_USER = 1
    INVALID_PRIVILEGE = 2
    INVALID_WEEK = 3
