"""
Note API endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Response, status

from auth import dependencies as auth_dependencies
from core.store import StoreClient
from core.validation import ListSort

from . import schemas, service

router = APIRouter(prefix="/v1/notes")


@router.get("")
async def list_notes(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, max_length=500),
    is_favorite: bool | None = Query(default=None),
    tag: str | None = Query(default=None, max_length=200),
    days: int | None = Query(default=None, ge=1, le=36500),
    sort: ListSort = Query(default=ListSort.DATE_NEWEST),
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return await service.list_notes(
        store,
        limit=limit,
        offset=offset,
        search=search,
        is_favorite=is_favorite,
        tag=tag,
        days=days,
        sort=sort,
    )


@router.post("/batch")
async def batch_notes(
    request: schemas.NoteBatchRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return await service.batch_notes(store, request)


@router.get("/{note_id}")
async def get_note(
    note_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.get_note(store, str(note_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    request: schemas.NoteCreateRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.create_note(store, request)}


@router.put("/{note_id}")
async def update_note(
    note_id: uuid.UUID,
    request: schemas.NoteUpdateRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.update_note(store, str(note_id), request)}


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> Response:
    await service.delete_note(store, str(note_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
