"""Database initialization utilities."""
import logging
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from laundry.config.settings import Settings, settings
from laundry.core.exceptions import ConfigurationError
from laundry.models import Base
from laundry.repositories import PassScheduleRepository
from laundry.services.base import TransactionManager
from laundry.utils.validators import is_pass_range

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Create all tables that do not exist yet.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    existing_tables = set(inspect(engine).get_table_names())
    missing = [table for table in Base.metadata.sorted_tables if table.name not in existing_tables]
    if not missing:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")
        return

    Base.metadata.create_all(bind=engine)
    logger.info(f"Created tables: {', '.join(table.name for table in missing)}")


def seed_pass_schedule(session_factory: sessionmaker, config: Settings = settings) -> int:
    """
    Ensure every configured room offers every configured pass range.

    Returns the number of (room, range) pairs added.

    Raises:
        ConfigurationError: If a room number or pass range is malformed
    """
    for pass_range in config.PASS_RANGES:
        if not is_pass_range(pass_range):
            raise ConfigurationError("Invalid pass range", config_key="PASS_RANGES",
                                     config_value=pass_range)
    for room in config.LAUNDRY_ROOMS:
        if room < 1:
            raise ConfigurationError("Invalid laundry room", config_key="LAUNDRY_ROOMS",
                                     config_value=room)

    added = 0
    with TransactionManager(session_factory).start() as session:
        repo = PassScheduleRepository(session)
        for room in config.LAUNDRY_ROOMS:
            for pass_range in config.PASS_RANGES:
                added += repo.ensure_schedule(room, pass_range)

    if added:
        logger.info(f"Seeded {added} pass schedule entries")
    return added


def drop_db(engine: Engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def main(config: Optional[Settings] = None) -> None:
    from laundry.config.database import get_engine, get_session_factory
    from laundry.config.logging import setup_logging

    config = config or settings
    setup_logging(config)
    init_db(get_engine())
    seed_pass_schedule(get_session_factory(), config)


if __name__ == "__main__":
    main()
