"""In-memory row store used for local development and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
import itertools
from typing import Any
from uuid import uuid4

from app.repositories.base import DuplicateRowError, Row, RowStore, RowStoreError

_UNIQUE_COLUMNS: dict[str, tuple[str, ...]] = {
    "users": ("username",),
}
_MANAGED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


@dataclass(slots=True)
class InMemoryStore(RowStore):
    """Simple, deterministic persistence layer for scaffolding and tests."""

    tables: dict[str, dict[str, Row]] = field(default_factory=dict)
    write_count: int = 0
    fail_ping_with: str | None = None
    _sequence: itertools.count = field(default_factory=itertools.count)
    _insert_order: dict[str, int] = field(default_factory=dict)

    def _table(self, table: str) -> dict[str, Row]:
        return self.tables.setdefault(table, {})

    async def list_rows(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        rows = [
            row
            for row in self._table(table).values()
            if all(row.get(column) == value for column, value in (filters or {}).items())
        ]
        if order_by is not None:
            # Ties fall back to insertion order, newest first when descending.
            rows.sort(
                key=lambda row: (row.get(order_by), self._insert_order[row["id"]]),
                reverse=descending,
            )
        return [dict(row) for row in rows]

    async def get_row(self, table: str, row_id: str) -> Row | None:
        row = self._table(table).get(row_id)
        return dict(row) if row is not None else None

    async def find_row(self, table: str, column: str, value: Any) -> Row | None:
        for row in self._table(table).values():
            if row.get(column) == value:
                return dict(row)
        return None

    async def insert_row(self, table: str, values: dict[str, Any]) -> Row:
        rows = self._table(table)
        for column in _UNIQUE_COLUMNS.get(table, ()):
            if any(existing.get(column) == values.get(column) for existing in rows.values()):
                raise DuplicateRowError(table, column)

        now = datetime.now(UTC)
        row: Row = {key: value for key, value in values.items() if key not in _MANAGED_COLUMNS}
        row.update(id=str(uuid4()), created_at=now, updated_at=now)
        rows[row["id"]] = row
        self._insert_order[row["id"]] = next(self._sequence)
        self.write_count += 1
        return dict(row)

    async def update_row(self, table: str, row_id: str, values: dict[str, Any]) -> Row | None:
        row = self._table(table).get(row_id)
        if row is None:
            return None
        row.update({key: value for key, value in values.items() if key not in _MANAGED_COLUMNS})
        row["updated_at"] = datetime.now(UTC)
        self.write_count += 1
        return dict(row)

    async def delete_row(self, table: str, row_id: str) -> bool:
        removed = self._table(table).pop(row_id, None)
        if removed is None:
            return False
        self._insert_order.pop(row_id, None)
        self.write_count += 1
        return True

    async def count_rows(self, table: str, *, filters: dict[str, Any] | None = None) -> int:
        return len(await self.list_rows(table, filters=filters))

    async def ping(self) -> None:
        if self.fail_ping_with is not None:
            raise RowStoreError(self.fail_ping_with)
