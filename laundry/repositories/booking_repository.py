"""
Pass booking queries.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from laundry.models import Account, Pass, PassBooking, PassSchedule
from laundry.repositories.base import BaseRepository
from laundry.utils.date_utils import is_active_booking, range_end_hour

# (date, room, range)
BookedCell = Tuple[date, int, str]
# (date, room, range, username)
OccupiedCell = Tuple[date, int, str, str]


class BookingRepository(BaseRepository[PassBooking]):

    def __init__(self, db: Session):
        super().__init__(PassBooking, db)

    def find_cell(self, pass_date: date, pass_schedule_id: int) -> Optional[PassBooking]:
        return self.find_one_by_criteria({"date": pass_date, "pass_schedule_id": pass_schedule_id})

    def find_upcoming_for_account(self, account_id: int, today: date) -> List[BookedCell]:
        """Bookings dated today or later, earliest first."""
        rows = self.db.execute(
            select(PassBooking.date, PassSchedule.room, Pass.range)
            .join(PassSchedule, PassBooking.pass_schedule_id == PassSchedule.id)
            .join(Pass, PassSchedule.pass_id == Pass.id)
            .where(PassBooking.account_id == account_id, PassBooking.date >= today)
            .order_by(PassBooking.date, Pass.range, PassSchedule.room)
        ).all()
        return [tuple(row) for row in rows]

    def count_in_period(self, account_id: int, start: date, end: date) -> int:
        return self.db.execute(
            select(func.count(PassBooking.id)).where(
                PassBooking.account_id == account_id,
                PassBooking.date >= start,
                PassBooking.date <= end,
            )
        ).scalar_one()

    def find_in_period(self, start: date, end: date) -> List[OccupiedCell]:
        rows = self.db.execute(
            select(PassBooking.date, PassSchedule.room, Pass.range, Account.username)
            .join(PassSchedule, PassBooking.pass_schedule_id == PassSchedule.id)
            .join(Pass, PassSchedule.pass_id == Pass.id)
            .join(Account, PassBooking.account_id == Account.id)
            .where(PassBooking.date >= start, PassBooking.date <= end)
        ).all()
        return [tuple(row) for row in rows]

    def create_booking(self, pass_date: date, account_id: int, pass_schedule_id: int) -> PassBooking:
        return self.create(PassBooking(
            date=pass_date,
            account_id=account_id,
            pass_schedule_id=pass_schedule_id,
        ))

    def delete_cell(self, pass_date: date, pass_schedule_id: int,
                    account_id: Optional[int] = None) -> int:
        conditions = [
            PassBooking.date == pass_date,
            PassBooking.pass_schedule_id == pass_schedule_id,
        ]
        if account_id is not None:
            conditions.append(PassBooking.account_id == account_id)
        return self.delete_where(*conditions)

    def delete_for_account(self, account_id: int) -> int:
        return self.delete_where(PassBooking.account_id == account_id)

    def delete_up_to(self, last_date: date) -> int:
        return self.delete_where(PassBooking.date <= last_date)

    def find_active_for_account(self, account_id: int, now: datetime) -> List[BookedCell]:
        """Active bookings of the account, earliest first."""
        return [
            cell for cell in self.find_upcoming_for_account(account_id, now.date())
            if is_active_booking(cell[0], cell[2], now)
        ]

    def count_active_from_range(self, account_id: int, now: datetime, pass_range: str) -> int:
        """Active bookings of the account ending no earlier than ``pass_range`` ends."""
        end_hour = range_end_hour(pass_range)
        return sum(
            1 for _, _, booked_range in self.find_active_for_account(account_id, now)
            if range_end_hour(booked_range) >= end_hour
        )
