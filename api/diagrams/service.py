"""
Diagram business logic.
"""

from __future__ import annotations

from typing import Any

from batch.processor import NO_FIELDS_MESSAGE
from core.errors import InvalidRequest, NotFound
from core.store import StoreClient

from . import repository, schemas

NOT_FOUND_MESSAGE = "Diagram not found"
COPY_SUFFIX = " (Copy)"


async def list_diagrams(store: StoreClient) -> list[dict[str, Any]]:
    return await repository.list_diagrams(store)


async def get_diagram(store: StoreClient, diagram_id: str) -> dict[str, Any]:
    row = await repository.get_diagram(store, diagram_id)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return row


async def create_diagram(
    store: StoreClient,
    payload: schemas.DiagramCreateRequest,
) -> dict[str, Any]:
    return await repository.insert_diagram(store, payload.model_dump())


async def update_diagram(
    store: StoreClient,
    diagram_id: str,
    payload: schemas.DiagramUpdateRequest,
) -> dict[str, Any]:
    changes = payload.changes()
    if not changes:
        raise InvalidRequest(NO_FIELDS_MESSAGE)

    row = await repository.update_diagram(store, diagram_id, changes)
    if row is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return row


async def delete_diagram(store: StoreClient, diagram_id: str) -> None:
    if not await repository.delete_diagram(store, diagram_id):
        raise NotFound(NOT_FOUND_MESSAGE)


async def duplicate_diagram(store: StoreClient, diagram_id: str) -> dict[str, Any]:
    original = await get_diagram(store, diagram_id)
    return await repository.insert_diagram(
        store,
        {
            "title": f"{original.get('title') or ''}{COPY_SUFFIX}",
            "shapes": original.get("shapes") or [],
            "connections": original.get("connections") or [],
            "thumbnail": original.get("thumbnail"),
        },
    )
