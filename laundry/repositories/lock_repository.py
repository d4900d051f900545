"""
Pass lock queries.

A lock is live while ``lock_start >= cutoff``, where ``cutoff`` is the
request time minus the lock duration.
"""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from laundry.models import Account, Pass, PassLock, PassSchedule
from laundry.repositories.base import BaseRepository
from laundry.repositories.booking_repository import OccupiedCell


class LockRepository(BaseRepository[PassLock]):

    def __init__(self, db: Session):
        super().__init__(PassLock, db)

    def find_live_owner(self, pass_date: date, pass_schedule_id: int,
                        cutoff: datetime) -> Optional[int]:
        """Account id holding a live lock on the cell, if any."""
        return self.db.execute(
            select(PassLock.account_id).where(
                PassLock.pass_date == pass_date,
                PassLock.pass_schedule_id == pass_schedule_id,
                PassLock.lock_start >= cutoff,
            )
        ).scalar_one_or_none()

    def find_live_from(self, first_date: date, cutoff: datetime) -> List[OccupiedCell]:
        rows = self.db.execute(
            select(PassLock.pass_date, PassSchedule.room, Pass.range, Account.username)
            .join(PassSchedule, PassLock.pass_schedule_id == PassSchedule.id)
            .join(Pass, PassSchedule.pass_id == Pass.id)
            .join(Account, PassLock.account_id == Account.id)
            .where(PassLock.pass_date >= first_date, PassLock.lock_start >= cutoff)
        ).all()
        return [tuple(row) for row in rows]

    def create_lock(self, lock_start: datetime, pass_date: date, account_id: int,
                    pass_schedule_id: int) -> PassLock:
        return self.create(PassLock(
            lock_start=lock_start,
            pass_date=pass_date,
            account_id=account_id,
            pass_schedule_id=pass_schedule_id,
        ))

    def delete_for_account(self, account_id: int) -> int:
        return self.delete_where(PassLock.account_id == account_id)

    def delete_account_cell(self, account_id: int, pass_date: date, pass_schedule_id: int) -> int:
        return self.delete_where(
            PassLock.account_id == account_id,
            PassLock.pass_date == pass_date,
            PassLock.pass_schedule_id == pass_schedule_id,
        )

    def purge_expired_cell(self, pass_date: date, pass_schedule_id: int, cutoff: datetime) -> int:
        return self.delete_where(
            PassLock.pass_date == pass_date,
            PassLock.pass_schedule_id == pass_schedule_id,
            PassLock.lock_start < cutoff,
        )
