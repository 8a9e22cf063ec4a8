"""
Database model and session factory for the SQL-backed store.

A single ``kv_store`` table holds one row per stored collection.  Any
SQLAlchemy URL works; the default is a SQLite file in the working directory.
"""

import datetime
import logging

from sqlalchemy import create_engine, Column, String, LargeBinary, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger('team_manager.database')

DEFAULT_DATABASE_URL = 'sqlite:///team_manager.db'

Base = declarative_base()


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class KeyValueEntry(Base):
    """One stored blob, addressed by key."""
    __tablename__ = "kv_store"

    key = Column(String(255), primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


def make_session_factory(database_url: str = DEFAULT_DATABASE_URL):
    """Create the engine for *database_url*, ensure the table exists and
    return a bound session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(bind=engine)
    logger.debug("Database tables initialized for %s", engine.url)
    return sessionmaker(autoflush=False, bind=engine)
