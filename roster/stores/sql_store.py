"""Store backed by a SQL table through SQLAlchemy."""
import datetime
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ..database import DEFAULT_DATABASE_URL, KeyValueEntry, make_session_factory
from ..errors import StoreError
from .base import KeyValueStore


class SqlStore(KeyValueStore):
    """Persists each key as a row of the ``kv_store`` table.

    Args:
        database_url:    SQLAlchemy URL, e.g. ``"sqlite:///team_manager.db"``.
        session_factory: Pre-built session factory; overrides *database_url*.
    """

    def __init__(self, database_url: str = DEFAULT_DATABASE_URL,
                 session_factory=None) -> None:
        self._log = logging.getLogger(f'team_manager.store.{type(self).__name__}')
        try:
            self._session_factory = session_factory or make_session_factory(database_url)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not open database {database_url}: {exc}") from exc

    def get(self, key: str) -> Optional[bytes]:
        db = self._session_factory()
        try:
            entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            return None if entry is None else bytes(entry.value)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not read key {key!r}: {exc}") from exc
        finally:
            db.close()

    def set(self, key: str, value: bytes) -> None:
        db = self._session_factory()
        try:
            entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            if entry:
                entry.value = value
                entry.updated_at = datetime.datetime.now(datetime.timezone.utc)
            else:
                db.add(KeyValueEntry(key=key, value=value))
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise StoreError(f"Could not write key {key!r}: {exc}") from exc
        finally:
            db.close()
        self._log.debug("Wrote %d bytes to key %r", len(value), key)
