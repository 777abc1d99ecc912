"""
Note persistence through the caller-scoped store.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core.store import AnyOf, Eq, Gte, ILike, Order, StoreClient
from core.validation import ListSort

TABLE = "notes"

_SORTS: dict[ListSort, tuple[Order, ...]] = {
    ListSort.DATE_NEWEST: (Order("created_at", descending=True),),
    ListSort.DATE_OLDEST: (Order("created_at"),),
    ListSort.ALPHA_ASC: (Order("title"),),
    ListSort.ALPHA_DESC: (Order("title", descending=True),),
    ListSort.MODIFIED: (Order("updated_at", descending=True),),
}


def _filters(
    *,
    search: str | None,
    is_favorite: bool | None,
    tag: str | None,
    created_since: datetime | None,
) -> list[Any]:
    where: list[Any] = []
    if search:
        where.append(AnyOf((ILike("title", search), ILike("content", search))))
    if is_favorite is not None:
        where.append(Eq("is_favorite", is_favorite))
    if tag:
        where.append(ILike("tags", tag))
    if created_since is not None:
        where.append(Gte("created_at", created_since))
    return where


async def list_notes(
    store: StoreClient,
    *,
    limit: int,
    offset: int,
    search: str | None = None,
    is_favorite: bool | None = None,
    tag: str | None = None,
    created_since: datetime | None = None,
    sort: ListSort = ListSort.DATE_NEWEST,
) -> tuple[list[dict[str, Any]], int]:
    """
    One page of matching notes plus the total number of matches.
    """
    where = _filters(
        search=search,
        is_favorite=is_favorite,
        tag=tag,
        created_since=created_since,
    )
    rows = await store.select(TABLE, where=where, order_by=_SORTS[sort], limit=limit, offset=offset)
    total = await store.count(TABLE, where=where)
    return rows, total


async def get_note(store: StoreClient, note_id: str) -> dict[str, Any] | None:
    return await store.select_one(TABLE, where=[Eq("id", note_id)])


async def insert_note(store: StoreClient, values: dict[str, Any]) -> dict[str, Any]:
    return await store.insert(TABLE, values)


async def update_note(
    store: StoreClient,
    note_id: str,
    values: dict[str, Any],
    *,
    expected_version: int | None = None,
) -> dict[str, Any] | None:
    where: list[Any] = [Eq("id", note_id)]
    if expected_version is not None:
        where.append(Eq("version", expected_version))
    rows = await store.update(TABLE, values, where=where)
    return rows[0] if rows else None


async def delete_note(store: StoreClient, note_id: str) -> bool:
    rows = await store.delete(TABLE, where=[Eq("id", note_id)])
    return bool(rows)
