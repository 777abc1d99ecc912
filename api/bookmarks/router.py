"""
Bookmark API endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies
from auth.schemas import Identity
from core.store import StoreClient
from core.validation import ListSort

from . import preview, schemas, service

router = APIRouter(prefix="/v1/bookmarks")


@router.get("")
async def list_bookmarks(
    status_filter: schemas.BookmarkStatus | None = Query(default=None, alias="status"),
    is_favorite: bool | None = Query(default=None),
    tag: str | None = Query(default=None, max_length=200),
    days: int | None = Query(default=None, ge=1, le=36500),
    sort: ListSort = Query(default=ListSort.DATE_NEWEST),
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    rows = await service.list_bookmarks(
        store,
        status=status_filter,
        is_favorite=is_favorite,
        tag=tag,
        days=days,
        sort=sort,
    )
    return {"data": rows}


@router.get("/search")
async def search_bookmarks(
    q: str | None = Query(default=None, max_length=500),
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return await service.search_bookmarks(store, q)


@router.get("/og-image")
async def get_og_image(
    url: str | None = Query(default=None, max_length=2048),
    _: Identity = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await preview.fetch_preview(url)


@router.post("/batch")
async def batch_bookmarks(
    request: schemas.BookmarkBatchRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return await service.batch_bookmarks(store, request)


@router.get("/{bookmark_id}")
async def get_bookmark(
    bookmark_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.get_bookmark(store, str(bookmark_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    request: schemas.BookmarkCreateRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.create_bookmark(store, request)}


@router.put("/{bookmark_id}")
async def update_bookmark(
    bookmark_id: uuid.UUID,
    request: schemas.BookmarkUpdateRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.update_bookmark(store, str(bookmark_id), request)}


@router.delete("/{bookmark_id}")
async def delete_bookmark(
    bookmark_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    await service.delete_bookmark(store, str(bookmark_id))
    return {"message": "Bookmark deleted successfully"}
