"""
Diagram API endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from core.store import StoreClient

from . import schemas, service

router = APIRouter(prefix="/v1/diagrams")


@router.get("")
async def list_diagrams(
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.list_diagrams(store)}


@router.get("/{diagram_id}")
async def get_diagram(
    diagram_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.get_diagram(store, str(diagram_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_diagram(
    request: schemas.DiagramCreateRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.create_diagram(store, request)}


@router.put("/{diagram_id}")
async def update_diagram(
    diagram_id: uuid.UUID,
    request: schemas.DiagramUpdateRequest,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.update_diagram(store, str(diagram_id), request)}


@router.delete("/{diagram_id}")
async def delete_diagram(
    diagram_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    await service.delete_diagram(store, str(diagram_id))
    return {"message": "Diagram deleted successfully"}


@router.post("/{diagram_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_diagram(
    diagram_id: uuid.UUID,
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.duplicate_diagram(store, str(diagram_id))}
