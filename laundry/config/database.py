"""
Database connection settings for the laundry pass booking service.
Provides the pooled SQLAlchemy engine and session factory.
"""

import time
import logging
from functools import lru_cache
from typing import Any, Dict

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from laundry.config.settings import Settings, settings

logger = logging.getLogger(__name__)

SLOW_QUERY_SECONDS = 0.5


def _connect_args(config: Settings, url: str) -> Dict[str, Any]:
    """Driver arguments for connect and statement timeouts"""
    if url.startswith("postgresql"):
        return {
            "connect_timeout": config.DB_CONNECT_TIMEOUT,
            "options": f"-c statement_timeout={config.DB_STATEMENT_TIMEOUT_MS}",
        }
    return {}


def create_db_engine(config: Settings = settings) -> Engine:
    """Create the pooled engine for the configured database"""
    url = config.get_database_url()
    return create_engine(
        url,
        pool_pre_ping=True,  # Check connection before using it
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_POOL_OVERFLOW,
        pool_recycle=3600,
        echo=config.DB_ECHO,
        connect_args=_connect_args(config, url),
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@lru_cache()
def get_engine() -> Engine:
    """Get the process wide engine, created on first use"""
    return create_db_engine(settings)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return create_session_factory(get_engine())


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log query execution time - start timer"""
    conn.info.setdefault('query_start_time', []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log query execution time - stop timer and log if slow query"""
    total_time = time.time() - conn.info['query_start_time'].pop()

    if total_time > SLOW_QUERY_SECONDS:
        logger.warning(
            f"Slow query detected ({total_time:.4f}s): "
            f"{statement[:100]}... with params {parameters}"
        )
