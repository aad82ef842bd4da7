from typing import Any, Dict, List, Mapping, Optional

from postgrest.exceptions import APIError
from supabase import AsyncClient

from ..core.errors import DuplicateKeyError, StoreError
from .base import QUESTIONS, QUIZZES, UNIQUE_KEYS, USERS, EntityStore

UNIQUE_VIOLATION = "23505"
INVALID_TEXT_REPRESENTATION = "22P02"


class SupabaseStore(EntityStore):
    """
    Entity store backed by Supabase (PostgREST). Slug and email uniqueness
    rely on unique indexes on the corresponding columns.
    """

    def __init__(self, client: AsyncClient, tables: Optional[Dict[str, str]] = None) -> None:
        self.client = client
        self.tables = {USERS: USERS, QUIZZES: QUIZZES, QUESTIONS: QUESTIONS}
        if tables:
            self.tables.update(tables)

    def _table(self, collection: str):
        try:
            return self.client.table(self.tables[collection])
        except KeyError:
            raise StoreError(f"Unknown collection: {collection}") from None

    def _translate(self, collection: str, err: APIError, row: Optional[Mapping[str, Any]] = None) -> StoreError:
        if err.code == UNIQUE_VIOLATION:
            detail = f"{err.message or ''} {err.details or ''}"
            for field in UNIQUE_KEYS.get(collection, ()):
                if field in detail:
                    return DuplicateKeyError(collection, field, (row or {}).get(field))
            field = (UNIQUE_KEYS.get(collection) or ("id",))[0]
            return DuplicateKeyError(collection, field, (row or {}).get(field))
        return StoreError(f"{collection}: {err.message}")

    @staticmethod
    def _apply(query, filters: Mapping[str, Any]):
        for key, value in filters.items():
            query = query.is_(key, "null") if value is None else query.eq(key, value)
        return query

    async def find_one(self, collection: str, filters: Mapping[str, Any]) -> Optional[dict]:
        query = self._apply(self._table(collection).select("*"), filters)
        try:
            res = await query.limit(1).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise self._translate(collection, e) from e
        return res.data[0] if res.data else None

    async def find(self, collection: str, filters: Mapping[str, Any]) -> List[dict]:
        query = self._apply(self._table(collection).select("*"), filters)
        try:
            res = await query.execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return []
            raise self._translate(collection, e) from e
        return res.data or []

    async def find_by_id(self, collection: str, entity_id: Any) -> Optional[dict]:
        if entity_id is None:
            return None
        return await self.find_one(collection, {"id": entity_id})

    async def insert(self, collection: str, entity: Mapping[str, Any]) -> dict:
        try:
            res = await self._table(collection).insert(dict(entity)).execute()
        except APIError as e:
            raise self._translate(collection, e, entity) from e

        if not res.data or not isinstance(res.data, list) or "id" not in res.data[0]:
            raise StoreError(f"Insert {collection} failed: no returned id")
        return res.data[0]

    async def insert_many(self, collection: str, entities: List[Mapping[str, Any]]) -> List[dict]:
        if not entities:
            return []
        # One INSERT statement: PostgreSQL applies it entirely or not at all.
        rows = [dict(e) for e in entities]
        try:
            res = await self._table(collection).insert(rows).execute()
        except APIError as e:
            raise self._translate(collection, e) from e

        if not res.data or len(res.data) != len(rows):
            raise StoreError(f"Insert {collection} failed: expected {len(rows)} rows")
        return res.data

    async def delete(self, collection: str, filters: Mapping[str, Any]) -> int:
        if not filters:
            raise StoreError("Refusing to delete without filters")
        query = self._apply(self._table(collection).delete(), filters)
        try:
            res = await query.execute()
        except APIError as e:
            raise self._translate(collection, e) from e
        return len(res.data or [])
