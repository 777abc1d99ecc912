"""
Code-snippet API endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status

from auth import dependencies as auth_dependencies
from core.store import StoreClient

from . import schemas, service

router = APIRouter(prefix="/v1/code-snippets")


@router.get("")
async def list_code_snippets(
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.list_snippets(store)}


@router.get("/{snippet_id}")
async def get_code_snippet(
    snippet_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.get_snippet(store, str(snippet_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_code_snippet(
    request: schemas.CodeSnippetCreateRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.create_snippet(store, request)}


@router.put("/{snippet_id}")
async def update_code_snippet(
    snippet_id: uuid.UUID,
    request: schemas.CodeSnippetUpdateRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.update_snippet(store, str(snippet_id), request)}


@router.delete("/{snippet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_code_snippet(
    snippet_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> Response:
    await service.delete_snippet(store, str(snippet_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
