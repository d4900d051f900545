"""
Builds the empty weekly pass grid from the static room/range configuration.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from laundry.repositories import PassScheduleRepository
from laundry.schemas import PassDTO, PassScheduleDTO, PassSlot, RoomPasses, ScheduleStatusCode
from laundry.utils.date_utils import format_date, week_days, week_start

logger = logging.getLogger(__name__)


class ScheduleBuilder:
    """
    Canonical grid for one week: every configured room, seven days from
    Monday, and one ``Available`` slot per configured range.
    """

    def __init__(self, session: Session):
        self.schedules = PassScheduleRepository(session)

    def build(self, monday: date) -> Optional[PassScheduleDTO]:
        """``None`` when no room or range is configured."""
        scheme = self.schedules.get_schedule_scheme()
        if not scheme:
            logger.warning("No pass schedule configured")
            return None

        monday = week_start(monday)
        days = [format_date(day) for day in week_days(monday)]
        room_passes = [
            RoomPasses(
                room_num=room,
                passes=[
                    PassDTO(date=day, slots=[PassSlot(range=pass_range) for pass_range in ranges])
                    for day in days
                ],
            )
            for room, ranges in scheme
        ]

        return PassScheduleDTO(
            week_number=monday.isocalendar()[1],
            room_count=len(room_passes),
            week_start_date=days[0],
            week_end_date=days[-1],
            room_passes=room_passes,
            status_code=ScheduleStatusCode.OK,
        )
