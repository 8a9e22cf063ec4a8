"""Store package — expose every key-value store backend from one import."""
from .base import KeyValueStore
from .file_store import FileStore
from .memory_store import MemoryStore
from .sql_store import SqlStore

__all__ = [
    'KeyValueStore',
    'FileStore',
    'MemoryStore',
    'SqlStore',
]
