"""Non-durable store kept in a dict (tests and ``--ephemeral`` runs)."""
from typing import Dict, Optional

from .base import KeyValueStore


class MemoryStore(KeyValueStore):

    def __init__(self, initial: Optional[Dict[str, bytes]] = None) -> None:
        self.data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.data[key] = bytes(value)
