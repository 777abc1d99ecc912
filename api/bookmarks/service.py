"""
Bookmark business logic.
"""

from __future__ import annotations

import time
from typing import Any

from batch.processor import NO_FIELDS_MESSAGE, CollectionSpec, process_batch
from core.errors import InvalidRequest, NotFound
from core.store import StoreClient
from core.validation import ListSort, is_http_url

from . import repository, schemas

NOT_FOUND_MESSAGE = "Bookmark not found"
SECONDS_PER_DAY = 86400


def now_epoch_s() -> int:
    return int(time.time())


def _create_values(fields: dict[str, Any]) -> dict[str, Any]:
    return {
        "title": fields.get("title") or fields["url"],
        "url": fields["url"],
        "tags": fields.get("tags") or None,
        "status": fields.get("status") or "unread",
        "is_favorite": bool(fields.get("is_favorite") or False),
        "time_added": now_epoch_s(),
    }


def _check_fields(fields: dict[str, Any]) -> str | None:
    if "url" in fields and not is_http_url(str(fields["url"] or "")):
        return "Invalid URL format"
    return None


BATCH_SPEC = CollectionSpec(
    table=repository.TABLE,
    label="bookmark",
    build_create=_create_values,
    required_on_create={"url": "URL"},
    check_fields=_check_fields,
)


async def list_bookmarks(
    store: StoreClient,
    *,
    status: str | None = None,
    is_favorite: bool | None = None,
    tag: str | None = None,
    days: int | None = None,
    sort: ListSort = ListSort.DATE_NEWEST,
) -> list[dict[str, Any]]:
    added_since = now_epoch_s() - days * SECONDS_PER_DAY if days else None
    return await repository.list_bookmarks(
        store,
        status=status,
        is_favorite=is_favorite,
        tag=(tag or "").strip() or None,
        added_since=added_since,
        sort=sort,
    )


async def search_bookmarks(store: StoreClient, query: str | None) -> dict[str, Any]:
    q = (query or "").strip()
    if not q:
        raise InvalidRequest("Search query is required")
    rows = await repository.search_bookmarks(store, q)
    return {"data": rows, "query": q}


async def get_bookmark(store: StoreClient, bookmark_id: str) -> dict[str, Any]:
    row = await repository.get_bookmark(store, bookmark_id)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return row


async def create_bookmark(
    store: StoreClient,
    payload: schemas.BookmarkCreateRequest,
) -> dict[str, Any]:
    return await repository.insert_bookmark(store, _create_values(payload.model_dump()))


async def update_bookmark(
    store: StoreClient,
    bookmark_id: str,
    payload: schemas.BookmarkUpdateRequest,
) -> dict[str, Any]:
    changes = payload.changes()
    if not changes:
        raise InvalidRequest(NO_FIELDS_MESSAGE)

    row = await repository.update_bookmark(store, bookmark_id, changes)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return row


async def delete_bookmark(store: StoreClient, bookmark_id: str) -> None:
    deleted = await repository.delete_bookmark(store, bookmark_id)
    if not deleted:
        raise NotFound(NOT_FOUND_MESSAGE)


async def batch_bookmarks(
    store: StoreClient,
    payload: schemas.BookmarkBatchRequest,
) -> dict[str, Any]:
    return await process_batch(store, BATCH_SPEC, payload.operations)
