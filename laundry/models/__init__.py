from laundry.models.base import Base, BaseModel
from laundry.models.enums import Privilege, SlotStatus
from laundry.models.person import Person, Account
from laundry.models.pass_schedule import Pass, PassSchedule
from laundry.models.booking import PassBooking, PassLock

__all__ = [
    "Base",
    "BaseModel",
    "Privilege",
    "SlotStatus",
    "Person",
    "Account",
    "Pass",
    "PassSchedule",
    "PassBooking",
    "PassLock",
]
