"""
Bookmark persistence through the caller-scoped store.
"""

from __future__ import annotations

from typing import Any

from core.store import AnyOf, Eq, Gte, ILike, NotEmpty, Order, StoreClient
from core.validation import ListSort

TABLE = "bookmarks"

_SORTS: dict[ListSort, tuple[Order, ...]] = {
    ListSort.DATE_NEWEST: (Order("time_added", descending=True),),
    ListSort.DATE_OLDEST: (Order("time_added"),),
    ListSort.ALPHA_ASC: (Order("title"),),
    ListSort.ALPHA_DESC: (Order("title", descending=True),),
    ListSort.MODIFIED: (Order("updated_at", descending=True),),
}


async def list_bookmarks(
    store: StoreClient,
    *,
    status: str | None = None,
    is_favorite: bool | None = None,
    tag: str | None = None,
    added_since: int | None = None,
    sort: ListSort = ListSort.DATE_NEWEST,
) -> list[dict[str, Any]]:
    where: list[Any] = []
    if status is not None:
        where.append(Eq("status", status))
    if is_favorite is not None:
        where.append(Eq("is_favorite", is_favorite))
    if tag:
        where.append(ILike("tags", tag))
    if added_since is not None:
        where.append(Gte("time_added", added_since))
    return await store.select(TABLE, where=where, order_by=_SORTS[sort])


async def search_bookmarks(store: StoreClient, query: str) -> list[dict[str, Any]]:
    match_any = AnyOf((ILike("title", query), ILike("url", query), ILike("tags", query)))
    return await store.select(
        TABLE,
        where=[match_any],
        order_by=_SORTS[ListSort.DATE_NEWEST],
    )


async def get_bookmark(store: StoreClient, bookmark_id: str) -> dict[str, Any] | None:
    return await store.select_one(TABLE, where=[Eq("id", bookmark_id)])


async def insert_bookmark(store: StoreClient, values: dict[str, Any]) -> dict[str, Any]:
    return await store.insert(TABLE, values)


async def update_bookmark(
    store: StoreClient,
    bookmark_id: str,
    values: dict[str, Any],
) -> dict[str, Any] | None:
    rows = await store.update(TABLE, values, where=[Eq("id", bookmark_id)])
    return rows[0] if rows else None


async def delete_bookmark(store: StoreClient, bookmark_id: str) -> bool:
    rows = await store.delete(TABLE, where=[Eq("id", bookmark_id)])
    return bool(rows)


async def list_tag_strings(store: StoreClient) -> list[str]:
    """
    Non-empty tag fields of the caller's bookmarks, newest first.
    """
    rows = await store.select(
        TABLE,
        where=[NotEmpty("tags")],
        order_by=_SORTS[ListSort.DATE_NEWEST],
    )
    return [str(row["tags"]) for row in rows]
