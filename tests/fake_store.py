"""
In-memory stand-in for `core.store.StoreClient`.

Implements the same primitives and condition types over plain dicts so the
HTTP layer can be exercised without Postgres. Ownership scoping mirrors the
real client: every call is restricted to the bound user id.
"""

from __future__ import annotations

import copy
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Mapping

from code_snippets.schemas import DEFAULT_BACKGROUND
from core.store import OWNER_COLUMN, AnyOf, Eq, Gte, ILike, NotEmpty, Order, StoreError, collection

USER_A = "6f1c1d1e-8a4b-4c59-9a36-0c1f5d1a0a01"
USER_B = "0b7f3e2a-52d5-4f0e-8f0b-3a9d8c6e4b02"

_DEFAULTS: dict[str, dict[str, Any]] = {
    "bookmarks": {"tags": None, "status": "unread", "is_favorite": False, "synced_at": None},
    "notes": {"title": "", "content": "", "tags": None, "is_favorite": False, "synced_at": None},
    "code_snippets": {
        "language": "javascript",
        "theme": "dracula",
        "background_type": "gradient",
        "background_value": DEFAULT_BACKGROUND,
        "padding": 64,
        "show_line_numbers": True,
        "font_family": "Fira Code",
        "font_size": 14,
        "window_style": "mac",
    },
    "diagrams": {"title": "Untitled Diagram", "shapes": [], "connections": [], "thumbnail": None},
}


def _matches(row: Mapping[str, Any], cond: Any) -> bool:
    if isinstance(cond, Eq):
        return row.get(cond.column) == cond.value
    if isinstance(cond, Gte):
        value = row.get(cond.column)
        return value is not None and value >= cond.value
    if isinstance(cond, ILike):
        value = row.get(cond.column)
        return value is not None and cond.needle.lower() in str(value).lower()
    if isinstance(cond, NotEmpty):
        return row.get(cond.column) not in (None, "")
    if isinstance(cond, AnyOf):
        return any(_matches(row, c) for c in cond.conditions)
    raise AssertionError(f"unsupported condition {cond!r}")


class FakeDatabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.calls: list[tuple[str, str]] = []
        # (primitive, table) -> exception raised once on the next matching call
        self.failures: dict[tuple[str, str], Exception] = {}
        self._clock = datetime.now(timezone.utc) - timedelta(hours=1)

    def tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def store_for(self, user_id: str) -> "FakeStore":
        return FakeStore(self, user_id)

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables[table]

    def fail_next(self, primitive: str, table: str, exc: Exception) -> None:
        self.failures[(primitive, table)] = exc

    def seed(self, table: str, user_id: str, **values: Any) -> dict[str, Any]:
        """Insert a row directly, bypassing call tracking."""
        return self.store_for(user_id)._insert_row(table, values)


class FakeStore:
    def __init__(self, database: FakeDatabase, user_id: str) -> None:
        self.db = database
        self.user_id = user_id

    def _enter(self, primitive: str, table: str) -> None:
        collection(table)
        self.db.calls.append((primitive, table))
        exc = self.db.failures.pop((primitive, table), None)
        if exc is not None:
            raise exc

    def _owned(self, table: str, where: Iterable[Any]) -> list[dict[str, Any]]:
        conditions = [Eq(OWNER_COLUMN, self.user_id), *where]
        return [r for r in self.db.tables[table] if all(_matches(r, c) for c in conditions)]

    def _check_columns(self, table: str, values: Mapping[str, Any]) -> None:
        columns = collection(table).columns
        unknown = set(values) - columns
        if unknown:
            raise StoreError(f"Unknown column {sorted(unknown)[0]!r} for {table}")

    async def select(
        self,
        table: str,
        *,
        where: Iterable[Any] = (),
        order_by: Iterable[Order] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        self._enter("select", table)
        rows = self._owned(table, where)
        for order in reversed(list(order_by)):
            rows.sort(
                key=lambda r, col=order.column: (r.get(col) is None, r.get(col)),
                reverse=order.descending,
            )
        start = offset or 0
        end = start + limit if limit is not None else None
        return copy.deepcopy(rows[start:end])

    async def select_one(self, table: str, *, where: Iterable[Any]) -> dict[str, Any] | None:
        rows = await self.select(table, where=where, limit=1)
        return rows[0] if rows else None

    async def count(self, table: str, *, where: Iterable[Any] = ()) -> int:
        self._enter("count", table)
        return len(self._owned(table, where))

    async def insert(self, table: str, values: Mapping[str, Any]) -> dict[str, Any]:
        self._enter("insert", table)
        return self._insert_row(table, values)

    def _insert_row(self, table: str, values: Mapping[str, Any]) -> dict[str, Any]:
        self._check_columns(table, values)
        now = self.db.tick()
        row: dict[str, Any] = {**_DEFAULTS.get(table, {}), **copy.deepcopy(dict(values))}
        row.update(
            {
                "id": str(uuid.uuid4()),
                OWNER_COLUMN: self.user_id,
                "created_at": now,
                "updated_at": now,
            }
        )
        if collection(table).versioned:
            row["version"] = 1
        self.db.tables[table].append(row)
        return copy.deepcopy(row)

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        *,
        where: Iterable[Any],
    ) -> list[dict[str, Any]]:
        self._enter("update", table)
        self._check_columns(table, values)
        if OWNER_COLUMN in values or "version" in values:
            raise StoreError("managed column in update")
        updated = []
        for row in self._owned(table, where):
            row.update(copy.deepcopy(dict(values)))
            if collection(table).versioned:
                row["version"] += 1
            row["updated_at"] = self.db.tick()
            updated.append(copy.deepcopy(row))
        return updated

    async def delete(self, table: str, *, where: Iterable[Any]) -> list[dict[str, Any]]:
        self._enter("delete", table)
        doomed = self._owned(table, where)
        self.db.tables[table] = [r for r in self.db.tables[table] if r not in doomed]
        return copy.deepcopy(doomed)
