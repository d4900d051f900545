"""
Weekly pass schedules with the booking and lock state of every slot.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from laundry.core.exceptions import ConfigurationError
from laundry.models import Privilege, SlotStatus
from laundry.repositories import BookingRepository, LockRepository, PersonRepository
from laundry.repositories.booking_repository import OccupiedCell
from laundry.schemas import PassScheduleDTO, ScheduleStatusCode
from laundry.services.base import BaseService
from laundry.services.schedule_builder import ScheduleBuilder
from laundry.utils.date_utils import format_date, parse_date, relative_week_start


class PassScheduleService(BaseService):
    """
    Resolves slot states for one week.

    Bookings dated within the week are applied first, then live locks; a
    slot marked by a booking keeps its booking occupant.
    """

    def get_passes(self, issuer: str, relative_week: int) -> Optional[PassScheduleDTO]:
        """
        Administrator view: every taken slot carries its occupant username.
        """
        try:
            with self.transactions.start() as session:
                now = self._now()
                info = PersonRepository(session).get_person_info(issuer)
                if info is None:
                    return PassScheduleDTO.rejected(ScheduleStatusCode.INVALID_USER)
                if info.privilege != Privilege.ADMINISTRATOR:
                    return PassScheduleDTO.rejected(ScheduleStatusCode.INVALID_PRIVILEGE)

                return self._resolve(session, relative_week, now)
        except Exception as e:
            return self._handle_exception(
                e, "get passes", {"username": issuer, "relative_week": relative_week}
            )

    def get_resident_passes(self, username: str, relative_week: int) -> Optional[PassScheduleDTO]:
        """
        Resident view of the previous, current or next week.

        The caller's own active booking shows as ``SelfBooking``; no slot
        reveals who holds it.
        """
        try:
            with self.transactions.start() as session:
                now = self._now()
                if relative_week not in self.config.RESIDENT_WEEKS_VISIBLE:
                    return PassScheduleDTO.rejected(ScheduleStatusCode.INVALID_WEEK)

                info = PersonRepository(session).get_person_info(username)
                if info is None:
                    return PassScheduleDTO.rejected(ScheduleStatusCode.INVALID_USER)
                if info.privilege not in (Privilege.STANDARD, Privilege.ADMINISTRATOR):
                    return PassScheduleDTO.rejected(ScheduleStatusCode.INVALID_PRIVILEGE)

                schedule = self._resolve(session, relative_week, now)

                active = BookingRepository(session).find_active_for_account(info.account_id, now)
                for booked_date, room, pass_range in active:
                    slot = schedule.find_slot(room, format_date(booked_date), pass_range)
                    if slot is not None:
                        slot.status = SlotStatus.SELF_BOOKING

                for slot in schedule.iter_slots():
                    slot.username = ""
                return schedule
        except Exception as e:
            return self._handle_exception(
                e, "get resident passes", {"username": username, "relative_week": relative_week}
            )

    def _resolve(self, session: Session, relative_week: int, now: datetime) -> PassScheduleDTO:
        monday = relative_week_start(now.date(), relative_week)
        schedule = ScheduleBuilder(session).build(monday)
        if schedule is None:
            raise ConfigurationError("No laundry rooms or pass ranges configured",
                                     config_key="pass_schedule")

        sunday = parse_date(schedule.week_end_date)
        cutoff = now - timedelta(minutes=self.config.LOCK_DURATION_MINUTES)
        self._mark_taken(schedule, BookingRepository(session).find_in_period(monday, sunday))
        self._mark_taken(schedule, LockRepository(session).find_live_from(now.date(), cutoff))
        return schedule

    @staticmethod
    def _mark_taken(schedule: PassScheduleDTO, cells: Iterable[OccupiedCell]) -> None:
        for cell_date, room, pass_range, occupant in cells:
            slot = schedule.find_slot(room, format_date(cell_date), pass_range)
            # Cells outside the week or the configuration are ignored
            if slot is None or slot.status != SlotStatus.AVAILABLE:
                continue
            slot.status = SlotStatus.TAKEN
            slot.username = occupant
