"""Store that keeps one JSON file per key inside a data directory."""
import logging
import os
import re
import tempfile
from typing import Optional

from ..errors import StoreError
from .base import KeyValueStore

_KEY_RE = re.compile(r'^[A-Za-z0-9_.-]+$')


class FileStore(KeyValueStore):
    """Persists each key to ``<directory>/<key>.json``.

    Writes use a write-then-rename strategy so a file is never left in a
    partially-written state.  The directory is created on first write.
    """

    def __init__(self, directory: str = '.team_manager') -> None:
        self.directory = directory
        self._log = logging.getLogger(f'team_manager.store.{type(self).__name__}')

    def path_for(self, key: str) -> str:
        """Return the file path backing *key*."""
        if not _KEY_RE.match(key) or key.startswith('.'):
            raise ValueError(f"Invalid store key: {key!r}")
        return os.path.join(self.directory, f'{key}.json')

    def get(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'rb') as fh:
                return fh.read()
        except OSError as exc:
            raise StoreError(f"Could not read {path}: {exc}") from exc

    def set(self, key: str, value: bytes) -> None:
        path = self.path_for(key)
        try:
            os.makedirs(self.directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix='.tmp')
        except OSError as exc:
            raise StoreError(f"Could not write {path}: {exc}") from exc
        try:
            with os.fdopen(fd, 'wb') as fh:
                fh.write(value)
            os.replace(tmp_path, path)
        except OSError as exc:
            # Clean up the temp file if anything goes wrong
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise StoreError(f"Could not write {path}: {exc}") from exc
        self._log.debug("Wrote %d bytes to %s", len(value), path)
