from laundry.repositories.base import BaseRepository
from laundry.repositories.person_repository import PersonInfo, PersonRepository
from laundry.repositories.pass_schedule_repository import PassScheduleRepository
from laundry.repositories.booking_repository import BookingRepository
from laundry.repositories.lock_repository import LockRepository

__all__ = [
    "BaseRepository",
    "PersonInfo",
    "PersonRepository",
    "PassScheduleRepository",
    "BookingRepository",
    "LockRepository",
]
