"""Engine and unit-of-work sessions for the vehicles database."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from vehicle_inventory.config import database_url, db_max_overflow, db_pool_size

logger = logging.getLogger(__name__)

# Built on first use so importing the app never needs DATABASE_URL
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Engine for DATABASE_URL, created on first use.

    Pool size and overflow come from DB_POOL_SIZE and DB_MAX_OVERFLOW.
    Connections are pre-pinged on checkout and recycled every hour.
    """
    global _engine
    if _engine is None:
        pool_size = db_pool_size()
        max_overflow = db_max_overflow()
        _engine = create_engine(
            database_url(),
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        logger.info(
            "Database engine created",
            extra={"pool_size": pool_size, "max_overflow": max_overflow},
        )
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        # Vehicles returned by repositories must stay readable after commit
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


def dispose_engine() -> None:
    """Close pooled connections; the next session builds a fresh engine."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None


@contextmanager
def get_session() -> Iterator[Session]:
    """
    One unit of work: commits when the block succeeds, rolls back on any error.

    A request's create, update or delete is only persisted here, after the
    route returned without raising.
    """
    session = get_session_factory()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
