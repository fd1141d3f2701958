"""Row-store port used by services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Row = dict[str, Any]


class RowStoreError(Exception):
    """Raised when the backing store rejects or cannot serve a request."""


class DuplicateRowError(RowStoreError):
    """Raised when an insert violates a uniqueness constraint."""

    def __init__(self, table: str, column: str | None = None) -> None:
        self.table = table
        self.column = column
        super().__init__(f"duplicate row in {table}" + (f" ({column})" if column else ""))


class RowStore(ABC):
    """Minimal table-oriented persistence contract.

    Rows are plain dicts keyed by column name. Every table has a string ``id``
    primary key and ``created_at``/``updated_at`` timestamps managed by the store.
    """

    @abstractmethod
    async def list_rows(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        """Return rows matching every equality filter, optionally ordered."""

    @abstractmethod
    async def get_row(self, table: str, row_id: str) -> Row | None:
        """Point lookup by primary key."""

    @abstractmethod
    async def find_row(self, table: str, column: str, value: Any) -> Row | None:
        """Return the first row whose ``column`` equals ``value``."""

    @abstractmethod
    async def insert_row(self, table: str, values: dict[str, Any]) -> Row:
        """Insert and return the stored row; raise ``DuplicateRowError`` on conflicts."""

    @abstractmethod
    async def update_row(self, table: str, row_id: str, values: dict[str, Any]) -> Row | None:
        """Apply a partial update; ``None`` when the row does not exist."""

    @abstractmethod
    async def delete_row(self, table: str, row_id: str) -> bool:
        """Delete by primary key; ``False`` when nothing was deleted."""

    @abstractmethod
    async def count_rows(self, table: str, *, filters: dict[str, Any] | None = None) -> int:
        """Number of rows matching every equality filter."""

    @abstractmethod
    async def ping(self) -> None:
        """Raise ``RowStoreError`` when the store is unreachable."""


__all__ = ["DuplicateRowError", "Row", "RowStore", "RowStoreError"]
