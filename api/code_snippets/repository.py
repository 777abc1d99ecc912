"""
Code-snippet persistence through the caller-scoped store.
"""

from __future__ import annotations

from typing import Any

from core.store import Eq, Order, StoreClient

TABLE = "code_snippets"


async def list_snippets(store: StoreClient) -> list[dict[str, Any]]:
    return await store.select(TABLE, order_by=[Order("created_at", descending=True)])


async def get_snippet(store: StoreClient, snippet_id: str) -> dict[str, Any] | None:
    return await store.select_one(TABLE, where=[Eq("id", snippet_id)])


async def insert_snippet(store: StoreClient, values: dict[str, Any]) -> dict[str, Any]:
    return await store.insert(TABLE, values)


async def update_snippet(
    store: StoreClient,
    snippet_id: str,
    values: dict[str, Any],
) -> dict[str, Any] | None:
    rows = await store.update(TABLE, values, where=[Eq("id", snippet_id)])
    return rows[0] if rows else None


async def delete_snippet(store: StoreClient, snippet_id: str) -> bool:
    rows = await store.delete(TABLE, where=[Eq("id", snippet_id)])
    return bool(rows)
