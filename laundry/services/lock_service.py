"""
Temporary locks that hold a pass while a resident completes a booking.

A lock lives for ``LOCK_DURATION_MINUTES`` from its start and expires
without any background work: liveness is compared against the request
time, and expired rows of a cell are purged before the cell is locked
again.
"""

from datetime import date, timedelta
from typing import Optional, Union

from sqlalchemy.orm import Session

from laundry.core.exceptions import DuplicateEntryError
from laundry.repositories import BookingRepository, LockRepository, PassScheduleRepository, PersonRepository
from laundry.services.base import BaseService
from laundry.utils.date_utils import DateUtilsError, in_booking_window, parse_date, range_elapsed


class LockService(BaseService):

    def lock_pass(self, username: str, room: int, pass_date: Union[str, date],
                  pass_range: str) -> Optional[bool]:
        """
        Lock the (room, date, range) cell for the caller.

        Returns ``False`` when the cell cannot be locked, including a lost
        race against a concurrent lock on the same cell.
        """
        context = {"username": username, "room": room, "date": str(pass_date), "pass_range": pass_range}
        try:
            with self.transactions.start() as session:
                return self._lock(session, username, room, pass_date, pass_range)
        except DuplicateEntryError:
            self._logger.debug("Lock lost to a concurrent request", extra=context)
            return False
        except Exception as e:
            return self._handle_exception(e, "lock pass", context)

    def unlock_pass(self, username: str) -> Optional[bool]:
        """Release every lock held by the caller; holding none is not an error."""
        try:
            with self.transactions.start() as session:
                info = PersonRepository(session).get_person_info(username)
                if info is None:
                    return False
                LockRepository(session).delete_for_account(info.account_id)
                return True
        except Exception as e:
            return self._handle_exception(e, "unlock pass", {"username": username})

    def _lock(self, session: Session, username: str, room: int,
              pass_date: Union[str, date], pass_range: str) -> bool:
        now = self._now()
        today = now.date()
        try:
            day = parse_date(pass_date)
        except DateUtilsError:
            return False

        info = PersonRepository(session).get_person_info(username)
        if info is None:
            self._logger.debug(f"Lock rejected, unknown user {username}")
            return False

        pass_schedule_id = PassScheduleRepository(session).find_pass_schedule_id(room, pass_range)
        if pass_schedule_id is None:
            self._logger.debug(f"Lock rejected, no pass {pass_range} in room {room}")
            return False

        if not in_booking_window(day, today) or range_elapsed(day, pass_range, now):
            self._logger.debug(f"Lock rejected, {day} {pass_range} is not bookable")
            return False

        bookings = BookingRepository(session)
        if bookings.find_cell(day, pass_schedule_id) is not None:
            return False

        locks = LockRepository(session)
        cutoff = now - timedelta(minutes=self.config.LOCK_DURATION_MINUTES)
        owner = locks.find_live_owner(day, pass_schedule_id, cutoff)
        if owner is not None:
            if owner == info.account_id:
                self._logger.debug(f"{username} already holds the lock on {day} {pass_range}")
            return False

        active = bookings.count_active_from_range(info.account_id, now, pass_range)
        if active >= self.config.ACTIVE_PASSES_ALLOWED:
            self._logger.debug(f"Lock rejected, {username} already has an active pass")
            return False

        locks.delete_for_account(info.account_id)
        locks.purge_expired_cell(day, pass_schedule_id, cutoff)
        locks.create_lock(now, day, info.account_id, pass_schedule_id)
        return True
