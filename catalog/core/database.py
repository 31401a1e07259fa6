from __future__ import annotations

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from catalog.core.config import settings

logger = logging.getLogger(__name__)

# --- SQLAlchemy engine ---
engine = create_engine(
    str(settings.DATABASE_URL),
    future=True,
    pool_pre_ping=True,
    echo=getattr(settings, "DB_ECHO", False),
)


if settings.is_sqlite and settings.SQLITE_FOREIGN_KEYS:

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores REFERENCES clauses unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# --- Session factory ---
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)

# --- Declarative base ---
Base = declarative_base()


def init_db() -> None:
    """
    Registers every model and creates the missing tables.
    The model module must be imported before create_all().
    """
    from catalog.models import catalog_models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("[catalog] DB init: tables ensured")


def drop_db() -> None:
    from catalog.models import catalog_models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
    logger.info("[catalog] DB teardown: tables dropped")


def get_db():
    """
    Provides the session of one scenario.
    An error raised while the scenario holds it rolls the session back before
    it propagates; the session is closed either way.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        logger.exception("[catalog] db session rolled back due to exception")
        raise
    finally:
        db.close()
        logger.debug("[catalog] db session closed")
