from datetime import date, datetime, timedelta

from laundry.models import PassBooking, PassLock, Privilege
from laundry.repositories import PassScheduleRepository, PersonRepository
from laundry.schemas import RegisterDTO
from laundry.services.base import TransactionManager
from laundry.utils.date_utils import Clock

# Wednesday of ISO week 20; the current week is 2024-05-13..19
NOW = datetime(2024, 5, 15, 10, 30)
TODAY = "2024-05-15"
YESTERDAY = "2024-05-14"
TOMORROW = "2024-05-16"
NEXT_WEEK = "2024-05-21"
IN_TWO_WEEKS = "2024-05-27"

PERSONAL_NUMBER = "19811218-9876"
PASSWORD = "password123"


class FixedClock(Clock):
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


def register_details(username: str, email: str = None, password: str = PASSWORD) -> RegisterDTO:
    return RegisterDTO(
        first_name="Test",
        last_name=username.capitalize(),
        personal_number=PERSONAL_NUMBER,
        email=email or f"{username}@laundry.se",
        username=username,
        password=password,
    )


def insert_person(session_factory, username: str, privilege: Privilege) -> None:
    with TransactionManager(session_factory).start() as session:
        PersonRepository(session).create_with_account(
            firstname="Raw",
            lastname="Person",
            personal_number=PERSONAL_NUMBER,
            email=f"{username}@laundry.se",
            privilege=privilege,
            username=username,
            password_hash="not-a-bcrypt-hash",
        )


def insert_booking(session_factory, username: str, room: int, day: date, pass_range: str) -> None:
    with TransactionManager(session_factory).start() as session:
        info = PersonRepository(session).get_person_info(username)
        schedule_id = PassScheduleRepository(session).find_pass_schedule_id(room, pass_range)
        session.add(PassBooking(date=day, account_id=info.account_id, pass_schedule_id=schedule_id))


def insert_lock(session_factory, username: str, room: int, day: date, pass_range: str,
                lock_start: datetime) -> None:
    with TransactionManager(session_factory).start() as session:
        info = PersonRepository(session).get_person_info(username)
        schedule_id = PassScheduleRepository(session).find_pass_schedule_id(room, pass_range)
        session.add(PassLock(lock_start=lock_start, pass_date=day,
                             account_id=info.account_id, pass_schedule_id=schedule_id))


def count_rows(session_factory, model) -> int:
    with TransactionManager(session_factory).start() as session:
        return session.query(model).count()
