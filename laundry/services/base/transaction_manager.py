"""
Transaction manager utilities for service layer operations.

Every public service operation runs inside exactly one unit of work.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Optional
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from laundry.core.exceptions import DatabaseConnectionError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TransactionContext:
    """Context information for a transaction."""

    transaction_id: str = field(default_factory=lambda: str(uuid4()))
    started_at: datetime = field(default_factory=_utcnow)
    committed: bool = False
    rolled_back: bool = False
    completed_at: Optional[datetime] = None
    error: Optional[Exception] = None

    @property
    def duration_ms(self) -> Optional[float]:
        """Get transaction duration in milliseconds."""
        if self.completed_at:
            delta = self.completed_at - self.started_at
            return delta.total_seconds() * 1000
        return None


class TransactionManager:
    """
    Opens a pooled session per unit of work.

    Commits when the block finishes, rolls back and re-raises on any
    exception, and always returns the connection to the pool.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._logger = logging.getLogger(__name__)

    @contextmanager
    def start(self) -> Iterator[Session]:
        """
        Start a new transaction.

        Example:
            with transaction_manager.start() as session:
                # perform operations
                # automatic commit on success, rollback on exception
        """
        ctx = TransactionContext()
        session = self._session_factory()

        try:
            self._check_connection(session)
            yield session
            self._commit(session, ctx)
        except Exception as exc:
            ctx.error = exc
            if not ctx.rolled_back:
                self._rollback(session, ctx, exc)
            raise
        finally:
            session.close()
            ctx.completed_at = _utcnow()
            self._logger.debug(
                f"Transaction completed: {ctx.transaction_id} "
                f"({'committed' if ctx.committed else 'rolled back'}) "
                f"in {ctx.duration_ms:.2f}ms",
                extra={
                    "transaction_id": ctx.transaction_id,
                    "committed": ctx.committed,
                    "duration_ms": ctx.duration_ms,
                }
            )

    def _check_connection(self, session: Session) -> None:
        """
        Acquire the connection up front so a dead database fails the
        operation before any statement of it runs.
        """
        try:
            session.execute(text("SELECT 1"))
        except DBAPIError as e:
            raise DatabaseConnectionError(f"Database connection failed: {e.orig}") from e

    def _commit(self, session: Session, ctx: TransactionContext) -> None:
        try:
            session.commit()
            ctx.committed = True
        except SQLAlchemyError as e:
            self._logger.error(
                f"Commit failed for transaction {ctx.transaction_id}: {e}",
                exc_info=True,
                extra={"transaction_id": ctx.transaction_id}
            )
            self._rollback(session, ctx, e)
            raise

    def _rollback(self, session: Session, ctx: TransactionContext, exc: Exception) -> None:
        try:
            session.rollback()
            ctx.rolled_back = True
            self._logger.debug(
                f"Transaction rolled back: {ctx.transaction_id} - {exc}",
                extra={"transaction_id": ctx.transaction_id, "error": str(exc)}
            )
        except SQLAlchemyError as e:
            # The original exception is re-raised by the caller
            self._logger.error(
                f"Rollback failed for transaction {ctx.transaction_id}: {e}",
                exc_info=True
            )
