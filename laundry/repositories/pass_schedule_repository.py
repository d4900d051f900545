"""
Static (room, pass range) configuration.
"""

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from laundry.models import Pass, PassSchedule
from laundry.repositories.base import BaseRepository


class PassScheduleRepository(BaseRepository[PassSchedule]):

    def __init__(self, db: Session):
        super().__init__(PassSchedule, db)

    def get_schedule_scheme(self) -> List[Tuple[int, List[str]]]:
        """Configured ranges per room, both in ascending order."""
        rows = self.db.execute(
            select(PassSchedule.room, Pass.range)
            .join(Pass, PassSchedule.pass_id == Pass.id)
            .order_by(PassSchedule.room, Pass.range)
        ).all()

        scheme: List[Tuple[int, List[str]]] = []
        for room, pass_range in rows:
            if not scheme or scheme[-1][0] != room:
                scheme.append((room, []))
            scheme[-1][1].append(pass_range)
        return scheme

    def find_pass_schedule_id(self, room: int, pass_range: str) -> Optional[int]:
        return self.db.execute(
            select(PassSchedule.id)
            .join(Pass, PassSchedule.pass_id == Pass.id)
            .where(PassSchedule.room == room, Pass.range == pass_range)
        ).scalar_one_or_none()

    def get_or_create_pass(self, pass_range: str) -> Pass:
        passes = BaseRepository(Pass, self.db)
        existing = passes.find_one_by_criteria({"range": pass_range})
        if existing is not None:
            return existing
        return passes.create(Pass(range=pass_range))

    def ensure_schedule(self, room: int, pass_range: str) -> bool:
        """Add the (room, range) pair if missing; True when a row was added."""
        if self.find_pass_schedule_id(room, pass_range) is not None:
            return False
        pass_ = self.get_or_create_pass(pass_range)
        self.create(PassSchedule(room=room, pass_id=pass_.id))
        return True
