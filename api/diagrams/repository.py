"""
Diagram persistence through the caller-scoped store.
"""

from __future__ import annotations

from typing import Any

from core.store import Eq, Order, StoreClient

TABLE = "diagrams"


async def list_diagrams(store: StoreClient) -> list[dict[str, Any]]:
    return await store.select(TABLE, order_by=[Order("updated_at", descending=True)])


async def get_diagram(store: StoreClient, diagram_id: str) -> dict[str, Any] | None:
    return await store.select_one(TABLE, where=[Eq("id", diagram_id)])


async def insert_diagram(store: StoreClient, values: dict[str, Any]) -> dict[str, Any]:
    return await store.insert(TABLE, values)


async def update_diagram(
    store: StoreClient,
    diagram_id: str,
    values: dict[str, Any],
) -> dict[str, Any] | None:
    rows = await store.update(TABLE, values, where=[Eq("id", diagram_id)])
    return rows[0] if rows else None


async def delete_diagram(store: StoreClient, diagram_id: str) -> bool:
    rows = await store.delete(TABLE, where=[Eq("id", diagram_id)])
    return bool(rows)
