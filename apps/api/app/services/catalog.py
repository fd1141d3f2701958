"""Shared CRUD behaviour for ordered, publishable portfolio records."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from app.core.logging_safety import safe_log_identifier
from app.errors import ApiError, not_found
from app.repositories.base import RowStore
from app.schemas.auth import AuthPrincipal

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def empty_update_error() -> ApiError:
    return ApiError(status_code=400, code="EMPTY_UPDATE", message="No data provided for update")


def _actor_id(actor: AuthPrincipal | None) -> str:
    return safe_log_identifier(actor.id if actor else None, prefix="pid")


class CatalogService(Generic[RecordT]):
    """CRUD over one row-store table, returning typed records.

    Subclasses name the table, the label used in messages, the record model
    and the default ordering. ``actor`` is the authenticated principal behind
    a write and is only used for audit logging.
    """

    table: ClassVar[str]
    label: ClassVar[str]
    record_model: ClassVar[type[BaseModel]]
    order_by: ClassVar[str] = "order_index"
    descending: ClassVar[bool] = False

    def __init__(self, store: RowStore) -> None:
        self._store = store

    def _to_record(self, row: dict[str, Any]) -> RecordT:
        return self.record_model.model_validate(row)  # type: ignore[return-value]

    def _audit(self, action: str, record_id: str, actor: AuthPrincipal | None) -> None:
        logger.info(
            "catalog.%s table=%s record_id=%s actor_id=%s",
            action,
            self.table,
            safe_log_identifier(record_id, prefix="rid"),
            _actor_id(actor),
        )

    async def list_records(self, *, filters: dict[str, Any] | None = None) -> list[RecordT]:
        active_filters = {column: value for column, value in (filters or {}).items() if value is not None}
        rows = await self._store.list_rows(
            self.table,
            filters=active_filters,
            order_by=self.order_by,
            descending=self.descending,
        )
        return [self._to_record(row) for row in rows]

    async def get(self, record_id: str) -> RecordT:
        row = await self._store.get_row(self.table, record_id)
        if row is None:
            raise not_found(self.label)
        return self._to_record(row)

    async def create(self, values: dict[str, Any], *, actor: AuthPrincipal | None = None) -> RecordT:
        row = await self._store.insert_row(self.table, values)
        self._audit("created", row["id"], actor)
        return self._to_record(row)

    async def update(
        self,
        record_id: str,
        changes: dict[str, Any],
        *,
        actor: AuthPrincipal | None = None,
    ) -> RecordT:
        if not changes:
            raise empty_update_error()
        row = await self._store.update_row(self.table, record_id, changes)
        if row is None:
            raise not_found(self.label)
        self._audit("updated", record_id, actor)
        return self._to_record(row)

    async def delete(self, record_id: str, *, actor: AuthPrincipal | None = None) -> None:
        if not await self._store.delete_row(self.table, record_id):
            raise not_found(self.label)
        self._audit("deleted", record_id, actor)

    async def toggle(self, record_id: str, column: str, *, actor: AuthPrincipal | None = None) -> RecordT:
        current = await self._store.get_row(self.table, record_id)
        if current is None:
            raise not_found(self.label)
        return await self.update(record_id, {column: not current.get(column)}, actor=actor)


__all__ = ["CatalogService", "empty_update_error"]
