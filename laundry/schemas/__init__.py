from laundry.schemas.status_codes import (
    BookingStatusCode,
    ScheduleStatusCode,
    UserInfoStatusCode,
    UserStatusCode,
)
from laundry.schemas.booking import BookingDTO
from laundry.schemas.pass_schedule import PassDTO, PassScheduleDTO, PassSlot, RoomPasses
from laundry.schemas.user import RegisterDTO, ResidentInfo, UserDTO, UserInfoDTO

__all__ = [
    "BookingStatusCode",
    "ScheduleStatusCode",
    "UserInfoStatusCode",
    "UserStatusCode",
    "BookingDTO",
    "PassDTO",
    "PassScheduleDTO",
    "PassSlot",
    "RoomPasses",
    "RegisterDTO",
    "ResidentInfo",
    "UserDTO",
    "UserInfoDTO",
]
