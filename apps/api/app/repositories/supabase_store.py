"""Supabase (PostgREST) row store adapter."""

from __future__ import annotations

import logging
from typing import Any

from starlette.concurrency import run_in_threadpool

from app.repositories.base import DuplicateRowError, Row, RowStore, RowStoreError

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION = "23505"
_PING_TABLE = "users"


class SupabaseRowStore(RowStore):
    """Runs supabase-py queries in the threadpool; the client itself is blocking."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_credentials(cls, url: str, service_role_key: str) -> SupabaseRowStore:
        try:
            from supabase import create_client
        except ImportError as exc:
            raise RowStoreError("Supabase client is unavailable") from exc

        # The service role key bypasses row level security; never ship it to browsers.
        return cls(create_client(url, service_role_key))

    async def _execute(self, query: Any, *, table: str) -> list[Row]:
        response = await self._response(query, table=table)
        return list(response.data or [])

    async def _response(self, query: Any, *, table: str) -> Any:
        try:
            response = await run_in_threadpool(query.execute)
        except Exception as exc:
            if str(getattr(exc, "code", "")) == _UNIQUE_VIOLATION:
                raise DuplicateRowError(table) from exc
            logger.warning("row_store.query_failed table=%s error=%s", table, type(exc).__name__)
            raise RowStoreError(str(exc) or "Row store request failed") from exc
        return response

    async def list_rows(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        query = self._client.table(table).select("*")
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if order_by is not None:
            query = query.order(order_by, desc=descending)
        return await self._execute(query, table=table)

    async def get_row(self, table: str, row_id: str) -> Row | None:
        return await self.find_row(table, "id", row_id)

    async def find_row(self, table: str, column: str, value: Any) -> Row | None:
        query = self._client.table(table).select("*").eq(column, value).limit(1)
        rows = await self._execute(query, table=table)
        return rows[0] if rows else None

    async def insert_row(self, table: str, values: dict[str, Any]) -> Row:
        rows = await self._execute(self._client.table(table).insert(values), table=table)
        if not rows:
            raise RowStoreError(f"Insert into {table} returned no row")
        return rows[0]

    async def update_row(self, table: str, row_id: str, values: dict[str, Any]) -> Row | None:
        rows = await self._execute(self._client.table(table).update(values).eq("id", row_id), table=table)
        return rows[0] if rows else None

    async def delete_row(self, table: str, row_id: str) -> bool:
        rows = await self._execute(self._client.table(table).delete().eq("id", row_id), table=table)
        return bool(rows)

    async def count_rows(self, table: str, *, filters: dict[str, Any] | None = None) -> int:
        query = self._client.table(table).select("id", count="exact")
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        response = await self._response(query, table=table)
        return response.count or 0

    async def ping(self) -> None:
        await self._execute(self._client.table(_PING_TABLE).select("id").limit(1), table=_PING_TABLE)


__all__ = ["SupabaseRowStore"]
