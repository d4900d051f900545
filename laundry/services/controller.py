"""
Single entry point for the HTTP layer into the booking services.
"""

import logging
from datetime import date
from typing import Optional, Union

from sqlalchemy.orm import sessionmaker

from laundry.config.settings import Settings, settings
from laundry.core.security import PasswordHasher
from laundry.repositories import PersonInfo
from laundry.schemas import BookingDTO, PassScheduleDTO, RegisterDTO, UserDTO, UserInfoDTO
from laundry.services.base import TransactionManager
from laundry.services.booking_service import BookingService
from laundry.services.lock_service import LockService
from laundry.services.pass_schedule_service import PassScheduleService
from laundry.services.person_service import PersonService
from laundry.utils.date_utils import Clock

logger = logging.getLogger(__name__)


class Controller:
    """
    Facade over the person, lock, booking and schedule services.

    All services share one transaction manager, one clock and one settings
    object. A ``None`` result from any operation means the operation could
    not be carried out.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        config: Settings = settings,
        clock: Optional[Clock] = None,
        hasher: Optional[PasswordHasher] = None,
    ):
        transactions = TransactionManager(session_factory)
        clock = clock or Clock(config.TIMEZONE)
        hasher = hasher or PasswordHasher(config.PASSWORD_BCRYPT_ROUNDS)

        self.config = config
        self.persons = PersonService(transactions, config, clock, hasher)
        self.locks = LockService(transactions, config, clock)
        self.bookings = BookingService(transactions, config, clock)
        self.schedules = PassScheduleService(transactions, config, clock)

    @classmethod
    def create(cls, config: Settings = settings) -> "Controller":
        """Controller backed by the process wide engine."""
        from laundry.config.database import get_session_factory
        logger.info(f"Creating controller for environment {config.ENVIRONMENT}")
        return cls(get_session_factory(), config)

    # Users

    def get_person_info(self, username: str) -> Optional[PersonInfo]:
        return self.persons.get_person_info(username)

    def login_user(self, username: str, password: str) -> Optional[UserDTO]:
        return self.persons.login_user(username, password)

    def register_resident(self, issuer: str, details: RegisterDTO) -> Optional[UserDTO]:
        return self.persons.register_resident(issuer, details)

    def register_administrator(self, details: RegisterDTO) -> Optional[UserDTO]:
        return self.persons.register_administrator(details)

    def list_users(self, issuer: str) -> Optional[UserInfoDTO]:
        return self.persons.list_users(issuer)

    def delete_user(self, issuer: str, username: str) -> Optional[bool]:
        return self.persons.delete_user(issuer, username)

    # Locks

    def lock_pass(self, username: str, room: int, pass_date: Union[str, date],
                  pass_range: str) -> Optional[bool]:
        return self.locks.lock_pass(username, room, pass_date, pass_range)

    def unlock_pass(self, username: str) -> Optional[bool]:
        return self.locks.unlock_pass(username)

    # Bookings

    def book_pass(self, username: str, room: int, pass_date: Union[str, date],
                  pass_range: str) -> Optional[BookingDTO]:
        return self.bookings.book_pass(username, room, pass_date, pass_range)

    def get_booked_pass(self, username: str) -> Optional[BookingDTO]:
        return self.bookings.get_booked_pass(username)

    def cancel_booked_pass(self, username: str, room: int, pass_date: Union[str, date],
                           pass_range: str) -> Optional[bool]:
        return self.bookings.cancel_booked_pass(username, room, pass_date, pass_range)

    def purge_old_bookings(self, before: Union[str, date]) -> Optional[bool]:
        return self.bookings.purge_old_bookings(before)

    # Schedules

    def get_passes(self, issuer: str, relative_week: int) -> Optional[PassScheduleDTO]:
        return self.schedules.get_passes(issuer, relative_week)

    def get_resident_passes(self, username: str, relative_week: int) -> Optional[PassScheduleDTO]:
        return self.schedules.get_resident_passes(username, relative_week)
