"""Repository base class used by both collection repositories."""
import logging
from typing import Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..errors import StoreError
from ..stores.base import KeyValueStore

T = TypeVar('T')


class CollectionRepository(Generic[T]):
    """Owns one ordered collection and saves it through to a store.

    The collection lives under a single store key as one encoded blob.
    :meth:`hydrate` loads it once at startup; every mutation re-encodes the
    full collection and overwrites the key.  Callers only see tuple
    snapshots from :meth:`items`, so the in-memory list cannot change
    without being persisted.

    Records are matched by their ``id`` attribute for :meth:`upsert` and by
    list position for :meth:`remove_at`.  Positions must come from a
    snapshot taken immediately before the removal.

    Sub-classes set :attr:`KEY` and implement :meth:`_encode` /
    :meth:`_decode`.
    """

    KEY = ''

    def __init__(self, store: KeyValueStore, key: Optional[str] = None) -> None:
        self._store = store
        self.key = key or self.KEY
        self._data: List[T] = []
        self._log = logging.getLogger(f'team_manager.repository.{type(self).__name__}')

    def _encode(self, records: Sequence[T]) -> bytes:
        raise NotImplementedError

    def _decode(self, raw: Optional[bytes]) -> List[T]:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def items(self) -> Tuple[T, ...]:
        """Return a snapshot of the collection in storage order."""
        return tuple(self._data)

    def find(self, entity_id: str) -> Optional[T]:
        for record in self._data:
            if record.id == entity_id:
                return record
        return None

    def __len__(self) -> int:
        return len(self._data)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def hydrate(self) -> None:
        """Replace the in-memory collection with what the store holds.

        An absent key, undecodable data or a failing store leave the
        collection empty.
        """
        try:
            raw = self._store.get(self.key)
        except StoreError as exc:
            self._log.warning("Could not load %r: %s", self.key, exc)
            raw = None
        self._data = self._decode(raw)
        self._log.debug("Hydrated %d record(s) from %r", len(self._data), self.key)

    def upsert(self, record: T) -> None:
        """Replace the record with the same ``id`` in place, else append it."""
        for index, existing in enumerate(self._data):
            if existing.id == record.id:
                self._data[index] = record
                break
        else:
            self._data.append(record)
        self.persist()

    def remove_at(self, position: int) -> Optional[T]:
        """Remove and return the record at *position*.

        Out-of-range positions (negative ones included) change nothing and
        return ``None``.
        """
        if not 0 <= position < len(self._data):
            self._log.warning("Ignoring delete at position %d (%d record(s))",
                              position, len(self._data))
            return None
        record = self._data.pop(position)
        self.persist()
        return record

    def remove_at_offsets(self, offsets: Iterable[int]) -> List[T]:
        """Remove every record at *offsets* in one step and persist once.

        Out-of-range offsets are ignored.  Returns the removed records in
        their former order.
        """
        valid = sorted({o for o in offsets if 0 <= o < len(self._data)})
        if not valid:
            return []
        removed = [self._data[o] for o in valid]
        for o in reversed(valid):
            del self._data[o]
        self.persist()
        return removed

    def persist(self) -> bool:
        """Write the full collection to the store.

        Returns:
            ``True`` on success; ``False`` if the store rejected the write
            (the failure is logged, not raised).
        """
        try:
            self._store.set(self.key, self._encode(self._data))
        except StoreError as exc:
            self._log.warning("Could not save %r: %s", self.key, exc)
            return False
        self._log.debug("Saved %d record(s) to %r", len(self._data), self.key)
        return True
