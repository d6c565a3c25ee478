"""
In-memory entity store.

``EntityStore`` keeps one ``dict`` per entity kind mapping numeric
identifiers to records, together with a monotonic id counter per kind.
It knows nothing about the records it holds: uniqueness and
referential checks belong to the callers (see
``services.storage.Storage``).

The store is constructed explicitly and owned by the application
(``app.state``), so every test can start from a fresh instance.
Identifiers start at 1 and are never reused, even after a delete.
State lives for the lifetime of the process only.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

ENTITY_KINDS = (
    "users",
    "items",
    "chats",
    "messages",
    "disposal_centers",
    "events",
)

RecordT = TypeVar("RecordT")


class EntityStore:
    """Keyed storage for every entity kind plus id assignment."""

    def __init__(self, kinds: Sequence[str] = ENTITY_KINDS) -> None:
        self._tables: Dict[str, Dict[int, Any]] = {kind: {} for kind in kinds}
        self._counters: Dict[str, int] = {kind: 1 for kind in kinds}
        self._locks: Dict[str, asyncio.Lock] = {kind: asyncio.Lock() for kind in kinds}

    def _table(self, kind: str) -> Dict[int, Any]:
        try:
            return self._tables[kind]
        except KeyError:
            raise KeyError(f"Unknown entity kind: {kind}") from None

    @property
    def kinds(self) -> List[str]:
        return list(self._tables)

    def create(self, kind: str, build: Callable[[int], RecordT]) -> RecordT:
        """Build a record for the next identifier and store it.

        The counter only advances once ``build`` has returned and the
        record is stored, so a failing build leaves no gap.
        """
        table = self._table(kind)
        record_id = self._counters[kind]
        record = build(record_id)
        table[record_id] = record
        self._counters[kind] = record_id + 1
        return record

    def put(self, kind: str, record_id: int, record: Any) -> None:
        self._table(kind)[record_id] = record

    def get(self, kind: str, record_id: int) -> Optional[Any]:
        return self._table(kind).get(record_id)

    def delete(self, kind: str, record_id: int) -> bool:
        return self._table(kind).pop(record_id, None) is not None

    def all(self, kind: str) -> List[Any]:
        """Return every record of ``kind`` in insertion order."""
        return list(self._table(kind).values())

    def count(self, kind: str) -> int:
        return len(self._table(kind))

    def lock(self, kind: str) -> asyncio.Lock:
        """Return the lock guarding composite read-then-write sequences on ``kind``."""
        self._table(kind)
        return self._locks[kind]
