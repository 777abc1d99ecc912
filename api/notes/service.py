"""
Note business logic.

Updates may carry the client's last-seen `version`. The write is then
conditioned on it; when nothing matches, the row is read back to tell a
missing note (404) from a stale one (409, with the stored row attached so
the client can merge).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from batch.processor import NO_FIELDS_MESSAGE, CollectionSpec, process_batch
from core.errors import InvalidRequest, NotFound, VersionConflict
from core.store import StoreClient
from core.validation import ListSort

from . import repository, schemas

NOT_FOUND_MESSAGE = "Note not found"
CONFLICT_MESSAGE = "Version conflict - note was modified by another client"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _create_values(fields: dict[str, Any]) -> dict[str, Any]:
    return {
        "title": fields.get("title") or "",
        "content": fields.get("content") or "",
        "tags": fields.get("tags") or None,
        "is_favorite": bool(fields.get("is_favorite") or False),
    }


BATCH_SPEC = CollectionSpec(
    table=repository.TABLE,
    label="note",
    build_create=_create_values,
)


async def list_notes(
    store: StoreClient,
    *,
    limit: int = 50,
    offset: int = 0,
    search: str | None = None,
    is_favorite: bool | None = None,
    tag: str | None = None,
    days: int | None = None,
    sort: ListSort = ListSort.DATE_NEWEST,
) -> dict[str, Any]:
    created_since = _utc_now() - timedelta(days=days) if days else None
    rows, total = await repository.list_notes(
        store,
        limit=limit,
        offset=offset,
        search=(search or "").strip() or None,
        is_favorite=is_favorite,
        tag=(tag or "").strip() or None,
        created_since=created_since,
        sort=sort,
    )
    return {"data": rows, "count": total}


async def get_note(store: StoreClient, note_id: str) -> dict[str, Any]:
    row = await repository.get_note(store, note_id)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return row


async def create_note(store: StoreClient, payload: schemas.NoteCreateRequest) -> dict[str, Any]:
    return await repository.insert_note(store, _create_values(payload.model_dump()))


async def update_note(
    store: StoreClient,
    note_id: str,
    payload: schemas.NoteUpdateRequest,
) -> dict[str, Any]:
    changes = payload.changes()
    if not changes:
        raise InvalidRequest(NO_FIELDS_MESSAGE)

    row = await repository.update_note(
        store,
        note_id,
        changes,
        expected_version=payload.version,
    )
    if row is not None:
        return row

    current = await repository.get_note(store, note_id)
    if current is None or payload.version is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    raise VersionConflict(CONFLICT_MESSAGE, data=current)


async def delete_note(store: StoreClient, note_id: str) -> None:
    deleted = await repository.delete_note(store, note_id)
    if not deleted:
        raise NotFound(NOT_FOUND_MESSAGE)


async def batch_notes(store: StoreClient, payload: schemas.NoteBatchRequest) -> dict[str, Any]:
    return await process_batch(store, BATCH_SPEC, payload.operations)
