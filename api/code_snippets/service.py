"""
Code-snippet business logic. Snippets are unversioned: last write wins.
"""

from __future__ import annotations

from typing import Any

from batch.processor import NO_FIELDS_MESSAGE
from core.errors import InvalidRequest, NotFound
from core.store import StoreClient

from . import repository, schemas

NOT_FOUND_MESSAGE = "Code snippet not found"


async def list_snippets(store: StoreClient) -> list[dict[str, Any]]:
    return await repository.list_snippets(store)


async def get_snippet(store: StoreClient, snippet_id: str) -> dict[str, Any]:
    row = await repository.get_snippet(store, snippet_id)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return row


async def create_snippet(
    store: StoreClient,
    payload: schemas.CodeSnippetCreateRequest,
) -> dict[str, Any]:
    return await repository.insert_snippet(store, payload.model_dump())


async def update_snippet(
    store: StoreClient,
    snippet_id: str,
    payload: schemas.CodeSnippetUpdateRequest,
) -> dict[str, Any]:
    changes = payload.changes()
    if not changes:
        raise InvalidRequest(NO_FIELDS_MESSAGE)

    row = await repository.update_snippet(store, snippet_id, changes)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return row


async def delete_snippet(store: StoreClient, snippet_id: str) -> None:
    if not await repository.delete_snippet(store, snippet_id):
        raise NotFound(NOT_FOUND_MESSAGE)
