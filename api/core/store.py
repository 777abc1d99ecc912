"""
User-scoped access to the resource tables.

A `StoreClient` is built per request for exactly one caller. It exposes a
handful of primitives (select / count / insert / update / delete) over the
known collections and always adds the ownership predicate
`user_id = <caller>` itself, so no call site can address a row by id alone.

Each primitive runs in its own short transaction that first assumes the
row-level-security role and installs the caller's JWT claims:

    SET LOCAL ROLE authenticated;
    SELECT set_config('request.jwt.claims', '<claims json>', true);

`LOCAL` settings vanish at commit/rollback, so nothing leaks onto the pooled
connection and one failing statement never poisons the next one.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Iterable, Mapping, Sequence

from . import config, db

logger = logging.getLogger(__name__)

_ROLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

OWNER_COLUMN = "user_id"


@dataclass(frozen=True)
class Collection:
    name: str
    columns: frozenset[str]
    json_columns: frozenset[str] = frozenset()
    versioned: bool = False


_COMMON = frozenset({"id", "user_id", "created_at", "updated_at"})

COLLECTIONS: dict[str, Collection] = {
    "bookmarks": Collection(
        name="bookmarks",
        columns=_COMMON
        | {"title", "url", "time_added", "tags", "status", "is_favorite", "version", "synced_at"},
        versioned=True,
    ),
    "notes": Collection(
        name="notes",
        columns=_COMMON | {"title", "content", "tags", "is_favorite", "version", "synced_at"},
        versioned=True,
    ),
    "code_snippets": Collection(
        name="code_snippets",
        columns=_COMMON
        | {
            "title",
            "code",
            "language",
            "theme",
            "background_type",
            "background_value",
            "padding",
            "show_line_numbers",
            "font_family",
            "font_size",
            "window_style",
        },
    ),
    "diagrams": Collection(
        name="diagrams",
        columns=_COMMON | {"title", "shapes", "connections", "thumbnail"},
        json_columns=frozenset({"shapes", "connections"}),
    ),
}


class StoreError(RuntimeError):
    pass


def collection(name: str) -> Collection:
    try:
        return COLLECTIONS[name]
    except KeyError as exc:
        raise StoreError(f"Unknown collection: {name}") from exc


def _column(coll: Collection, name: str) -> str:
    if name not in coll.columns:
        raise StoreError(f"Unknown column {name!r} for {coll.name}")
    return f'"{name}"'


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class _Params:
    """Collects positional arguments and hands out `$n` placeholders."""

    def __init__(self) -> None:
        self.values: list[Any] = []

    def add(self, value: Any, *, cast: str = "") -> str:
        self.values.append(value)
        return f"${len(self.values)}{cast}"


# Row filters. Each renders itself into a SQL fragment against one collection.


@dataclass(frozen=True)
class Eq:
    column: str
    value: Any

    def to_sql(self, coll: Collection, params: _Params) -> str:
        return f"{_column(coll, self.column)} = {params.add(self.value)}"


@dataclass(frozen=True)
class Gte:
    column: str
    value: Any

    def to_sql(self, coll: Collection, params: _Params) -> str:
        return f"{_column(coll, self.column)} >= {params.add(self.value)}"


@dataclass(frozen=True)
class ILike:
    """Case-insensitive substring match."""

    column: str
    needle: str

    def to_sql(self, coll: Collection, params: _Params) -> str:
        pattern = f"%{_escape_like(self.needle)}%"
        return f"{_column(coll, self.column)} ILIKE {params.add(pattern)}"


@dataclass(frozen=True)
class NotEmpty:
    column: str

    def to_sql(self, coll: Collection, params: _Params) -> str:
        col = _column(coll, self.column)
        return f"({col} IS NOT NULL AND {col} <> '')"


@dataclass(frozen=True)
class AnyOf:
    conditions: tuple[Any, ...]

    def to_sql(self, coll: Collection, params: _Params) -> str:
        if not self.conditions:
            return "FALSE"
        return "(" + " OR ".join(c.to_sql(coll, params) for c in self.conditions) + ")"


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = False


Condition = Eq | Gte | ILike | NotEmpty | AnyOf


@dataclass
class StoreClient:
    """
    Narrow, caller-bound handle over one pooled connection.
    """

    conn: Any
    user_id: str
    claims: Mapping[str, Any] = field(default_factory=dict)
    role: str = ""

    def __post_init__(self) -> None:
        if not self.user_id:
            raise StoreError("StoreClient requires a user id.")
        if self.role and not _ROLE_RE.match(self.role):
            raise StoreError(f"Invalid database role: {self.role!r}")

    def _where(
        self, coll: Collection, params: _Params, conditions: Iterable[Condition]
    ) -> str:
        fragments = [Eq(OWNER_COLUMN, self.user_id).to_sql(coll, params)]
        fragments.extend(c.to_sql(coll, params) for c in conditions)
        return " AND ".join(fragments)

    def _decode(self, coll: Collection, record: Mapping[str, Any]) -> dict[str, Any]:
        row = dict(record)
        for key, value in row.items():
            if isinstance(value, uuid.UUID):
                row[key] = str(value)
            elif key in coll.json_columns and isinstance(value, str):
                row[key] = json.loads(value)
        return row

    def _encode(self, coll: Collection, params: _Params, column: str, value: Any) -> str:
        if column in coll.json_columns:
            return params.add(json.dumps(value), cast="::jsonb")
        return params.add(value)

    async def _fetch(self, coll: Collection, sql: str, args: Sequence[Any]) -> list[dict[str, Any]]:
        async with self.conn.transaction():
            if self.role:
                await self.conn.execute(f'SET LOCAL ROLE "{self.role}"')
            await self.conn.execute(
                "SELECT set_config('request.jwt.claims', $1, true)",
                json.dumps(dict(self.claims)),
            )
            records = await self.conn.fetch(sql, *args)
        logger.debug("store_query table=%s rows=%s", coll.name, len(records))
        return [self._decode(coll, r) for r in records]

    async def select(
        self,
        table: str,
        *,
        where: Iterable[Condition] = (),
        order_by: Iterable[Order] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        coll = collection(table)
        params = _Params()
        sql = f'SELECT * FROM "{coll.name}" WHERE {self._where(coll, params, where)}'

        orders = [f"{_column(coll, o.column)} {'DESC' if o.descending else 'ASC'}" for o in order_by]
        if orders:
            sql += " ORDER BY " + ", ".join(orders)
        if limit is not None:
            sql += f" LIMIT {params.add(int(limit))}"
        if offset:
            sql += f" OFFSET {params.add(int(offset))}"
        return await self._fetch(coll, sql, params.values)

    async def select_one(self, table: str, *, where: Iterable[Condition]) -> dict[str, Any] | None:
        rows = await self.select(table, where=where, limit=1)
        return rows[0] if rows else None

    async def count(self, table: str, *, where: Iterable[Condition] = ()) -> int:
        coll = collection(table)
        params = _Params()
        sql = f'SELECT count(*) AS "count" FROM "{coll.name}" WHERE {self._where(coll, params, where)}'
        # The decoded row is a plain dict; count is the only column.
        rows = await self._fetch(coll, sql, params.values)
        return int(rows[0]["count"]) if rows else 0

    async def insert(self, table: str, values: Mapping[str, Any]) -> dict[str, Any]:
        coll = collection(table)
        params = _Params()
        data = {k: v for k, v in values.items() if k != OWNER_COLUMN}
        data[OWNER_COLUMN] = self.user_id
        if coll.versioned:
            data["version"] = 1

        columns = [_column(coll, k) for k in data]
        placeholders = [self._encode(coll, params, k, v) for k, v in data.items()]
        sql = (
            f'INSERT INTO "{coll.name}" ({", ".join(columns)}) '
            f'VALUES ({", ".join(placeholders)}) RETURNING *'
        )
        rows = await self._fetch(coll, sql, params.values)
        return rows[0]

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        *,
        where: Iterable[Condition],
    ) -> list[dict[str, Any]]:
        """
        Apply `values` to the caller's rows matching `where`.

        Versioned collections get `version = version + 1` in the same
        statement. Returns the updated rows; an empty list means nothing
        matched (absent, not owned, or stale version).
        """
        coll = collection(table)
        if OWNER_COLUMN in values:
            raise StoreError("user_id is immutable.")
        if "version" in values:
            raise StoreError("version is managed by the store.")

        params = _Params()
        assignments = [
            f"{_column(coll, k)} = {self._encode(coll, params, k, v)}" for k, v in values.items()
        ]
        if coll.versioned:
            assignments.append('"version" = "version" + 1')
        assignments.append('"updated_at" = now()')

        sql = (
            f'UPDATE "{coll.name}" SET {", ".join(assignments)} '
            f"WHERE {self._where(coll, params, where)} RETURNING *"
        )
        return await self._fetch(coll, sql, params.values)

    async def delete(self, table: str, *, where: Iterable[Condition]) -> list[dict[str, Any]]:
        coll = collection(table)
        params = _Params()
        sql = f'DELETE FROM "{coll.name}" WHERE {self._where(coll, params, where)} RETURNING *'
        return await self._fetch(coll, sql, params.values)


@asynccontextmanager
async def open_store(
    *,
    user_id: str,
    claims: Mapping[str, Any],
) -> AsyncIterator[StoreClient]:
    """
    Build a `StoreClient` for one caller on a freshly borrowed connection.

    The connection goes back to the pool when the block exits.
    """
    async with db.connection() as conn:
        yield StoreClient(conn=conn, user_id=user_id, claims=claims, role=config.db_rls_role())
