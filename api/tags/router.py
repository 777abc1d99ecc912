"""
Tag API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.store import StoreClient

from . import service

router = APIRouter(prefix="/v1/tags")


@router.get("")
async def get_tags(
    store: StoreClient = Depends(auth_dependencies.get_store),
) -> dict:
    return {"data": await service.top_tags(store)}
