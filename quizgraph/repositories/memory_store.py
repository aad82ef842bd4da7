import asyncio
import uuid
from typing import Any, Dict, List, Mapping, Optional

from ..core.errors import DuplicateKeyError, StoreError
from .base import COLLECTIONS, UNIQUE_KEYS, EntityStore


class MemoryStore(EntityStore):
    """
    Process-local store. Writes are serialized by a single lock, which is
    also where unique keys are enforced.
    """

    def __init__(self) -> None:
        self._rows: Dict[str, Dict[str, dict]] = {name: {} for name in COLLECTIONS}
        self._lock = asyncio.Lock()

    def _table(self, collection: str) -> Dict[str, dict]:
        try:
            return self._rows[collection]
        except KeyError:
            raise StoreError(f"Unknown collection: {collection}") from None

    @staticmethod
    def _matches(row: dict, filters: Mapping[str, Any]) -> bool:
        return all(row.get(k) == v for k, v in filters.items())

    async def find_one(self, collection: str, filters: Mapping[str, Any]) -> Optional[dict]:
        for row in self._table(collection).values():
            if self._matches(row, filters):
                return dict(row)
        return None

    async def find(self, collection: str, filters: Mapping[str, Any]) -> List[dict]:
        return [dict(r) for r in self._table(collection).values() if self._matches(r, filters)]

    async def find_by_id(self, collection: str, entity_id: Any) -> Optional[dict]:
        if entity_id is None:
            return None
        row = self._table(collection).get(str(entity_id))
        return dict(row) if row is not None else None

    def _check_unique(self, collection: str, rows: List[dict]) -> None:
        table = self._table(collection)
        for field in UNIQUE_KEYS.get(collection, ()):
            taken = {r.get(field) for r in table.values()}
            for row in rows:
                value = row.get(field)
                if value is None:
                    continue
                if value in taken:
                    raise DuplicateKeyError(collection, field, value)
                taken.add(value)

    @staticmethod
    def _stage(entity: Mapping[str, Any]) -> dict:
        row = dict(entity)
        row["id"] = uuid.uuid4().hex
        return row

    async def insert(self, collection: str, entity: Mapping[str, Any]) -> dict:
        return (await self.insert_many(collection, [entity]))[0]

    async def insert_many(self, collection: str, entities: List[Mapping[str, Any]]) -> List[dict]:
        rows = [self._stage(e) for e in entities]
        async with self._lock:
            self._check_unique(collection, rows)
            table = self._table(collection)
            for row in rows:
                table[row["id"]] = row
        return [dict(r) for r in rows]

    async def delete(self, collection: str, filters: Mapping[str, Any]) -> int:
        async with self._lock:
            table = self._table(collection)
            doomed = [rid for rid, row in table.items() if self._matches(row, filters)]
            for rid in doomed:
                del table[rid]
        return len(doomed)
