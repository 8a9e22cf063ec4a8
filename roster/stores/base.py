"""Key-value store contract shared by all backends."""
from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Durable, synchronous, string-keyed blob storage.

    Backends raise :class:`~roster.errors.StoreError` when the underlying
    medium cannot be read or written.  A key that was never written reads
    back as ``None``.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the bytes stored under *key*, or ``None`` if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Replace whatever is stored under *key* with *value*."""
        pass
