"""
Pass bookings: allocation, lookup and cancellation.
"""

from datetime import date, timedelta
from typing import Optional, Union

from sqlalchemy.orm import Session

from laundry.core.exceptions import DuplicateEntryError
from laundry.models import Privilege
from laundry.repositories import BookingRepository, LockRepository, PassScheduleRepository, PersonRepository
from laundry.schemas import BookingDTO, BookingStatusCode
from laundry.services.base import BaseService
from laundry.utils.date_utils import (
    DateUtilsError,
    format_date,
    in_booking_window,
    month_range,
    parse_date,
    range_elapsed,
)


class BookingService(BaseService):
    """
    Books passes for residents.

    All checks of :meth:`book_pass` run before anything is written, in a
    fixed order, and the first failing check decides the status code.
    """

    def book_pass(self, username: str, room: int, pass_date: Union[str, date],
                  pass_range: str) -> Optional[BookingDTO]:
        context = {"username": username, "room": room, "date": str(pass_date), "pass_range": pass_range}
        try:
            with self.transactions.start() as session:
                return self._book(session, username, room, pass_date, pass_range)
        except DuplicateEntryError:
            self._logger.debug("Booking lost to a concurrent request", extra=context)
            return BookingDTO.rejected(BookingStatusCode.BOOKED_PASS)
        except Exception as e:
            return self._handle_exception(e, "book pass", context)

    def get_booked_pass(self, username: str) -> Optional[BookingDTO]:
        """The caller's earliest active booking."""
        try:
            with self.transactions.start() as session:
                now = self._now()
                info = PersonRepository(session).get_person_info(username)
                if info is None:
                    return BookingDTO.rejected(BookingStatusCode.INVALID_USER)

                active = BookingRepository(session).find_active_for_account(info.account_id, now)
                if not active:
                    return BookingDTO.rejected(BookingStatusCode.NO_BOOKING)

                booked_date, room, pass_range = active[0]
                return BookingDTO(
                    date=format_date(booked_date),
                    room_number=room,
                    pass_range=pass_range,
                    status_code=BookingStatusCode.OK,
                )
        except Exception as e:
            return self._handle_exception(e, "get booked pass", {"username": username})

    def cancel_booked_pass(self, username: str, room: int, pass_date: Union[str, date],
                           pass_range: str) -> Optional[bool]:
        """
        Cancel a booking dated today or later.

        Administrators may cancel any booking. Residents may cancel their
        own, except a booking for today whose range has already ended.
        """
        context = {"username": username, "room": room, "date": str(pass_date), "pass_range": pass_range}
        try:
            with self.transactions.start() as session:
                now = self._now()
                try:
                    day = parse_date(pass_date)
                except DateUtilsError:
                    return False
                if day < now.date():
                    return False

                info = PersonRepository(session).get_person_info(username)
                if info is None:
                    return False

                pass_schedule_id = PassScheduleRepository(session).find_pass_schedule_id(room, pass_range)
                if pass_schedule_id is None:
                    return False

                is_admin = info.privilege == Privilege.ADMINISTRATOR
                if not is_admin and range_elapsed(day, pass_range, now):
                    return False

                deleted = BookingRepository(session).delete_cell(
                    day, pass_schedule_id, None if is_admin else info.account_id
                )
                if deleted:
                    self._logger.info("Booking cancelled", extra=context)
                return deleted > 0
        except Exception as e:
            return self._handle_exception(e, "cancel booked pass", context)

    def purge_old_bookings(self, before: Union[str, date]) -> Optional[bool]:
        """Delete every booking dated on or before ``before``."""
        try:
            with self.transactions.start() as session:
                deleted = BookingRepository(session).delete_up_to(parse_date(before))
                self._logger.info(f"Purged {deleted} booking(s) dated on or before {before}")
                return deleted > 0
        except Exception as e:
            return self._handle_exception(e, "purge old bookings", {"date": str(before)})

    def _book(self, session: Session, username: str, room: int,
              pass_date: Union[str, date], pass_range: str) -> BookingDTO:
        now = self._now()
        try:
            day = parse_date(pass_date)
        except DateUtilsError:
            return BookingDTO.rejected(BookingStatusCode.INVALID_DATE)
        if not in_booking_window(day, now.date()):
            return BookingDTO.rejected(BookingStatusCode.INVALID_DATE)

        info = PersonRepository(session).get_person_info(username)
        if info is None:
            return BookingDTO.rejected(BookingStatusCode.INVALID_USER)

        pass_schedule_id = PassScheduleRepository(session).find_pass_schedule_id(room, pass_range)
        if pass_schedule_id is None or range_elapsed(day, pass_range, now):
            return BookingDTO.rejected(BookingStatusCode.INVALID_PASS_INFO)

        bookings = BookingRepository(session)
        if bookings.find_cell(day, pass_schedule_id) is not None:
            return BookingDTO.rejected(BookingStatusCode.BOOKED_PASS)

        locks = LockRepository(session)
        cutoff = now - timedelta(minutes=self.config.LOCK_DURATION_MINUTES)
        owner = locks.find_live_owner(day, pass_schedule_id, cutoff)
        if owner is not None and owner != info.account_id:
            return BookingDTO.rejected(BookingStatusCode.LOCKED_PASS)

        active = bookings.count_active_from_range(info.account_id, now, pass_range)
        if active >= self.config.ACTIVE_PASSES_ALLOWED:
            return BookingDTO.rejected(BookingStatusCode.EXISTENT_ACTIVE_PASS)

        first_day, last_day = month_range(day.year, day.month)
        if bookings.count_in_period(info.account_id, first_day, last_day) >= self.config.TOTAL_MONTH_PASSES_ALLOWED:
            return BookingDTO.rejected(BookingStatusCode.PASS_COUNT_EXCEEDED)

        bookings.create_booking(day, info.account_id, pass_schedule_id)
        locks.delete_account_cell(info.account_id, day, pass_schedule_id)
        self._logger.info(f"{username} booked room {room} on {day} {pass_range}")

        return BookingDTO(
            date=format_date(day),
            room_number=room,
            pass_range=pass_range,
            status_code=BookingStatusCode.OK,
        )
