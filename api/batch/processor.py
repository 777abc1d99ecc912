"""
Sequential batch processor for one resource collection.

Items are applied strictly in order, one store round-trip at a time, and
are never rolled back as a group. Every item ends up as exactly one
`ItemResult`: a missing id/required field, a stale version or any store
fault inside an item is recorded on that item and processing moves on.

Limitation: ids are not resolved across items, so an update cannot refer
to a row created earlier in the same batch unless the client already
knows its id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Sequence

from core.store import Eq, StoreClient

from .schemas import BatchOperation, ItemResult, OperationType

logger = logging.getLogger(__name__)

NO_FIELDS_MESSAGE = "No fields provided to update"


@dataclass(frozen=True)
class CollectionSpec:
    """
    What the processor needs to know about one versioned collection.

    `build_create` turns the item's provided fields into the insert values
    (defaults included). `required_on_create` maps field name to the label
    used in the error message.
    """

    table: str
    label: str
    build_create: Callable[[dict[str, Any]], dict[str, Any]]
    required_on_create: dict[str, str] = field(default_factory=dict)
    # Returns an error message for bad field values, or None.
    check_fields: Callable[[dict[str, Any]], str | None] | None = None

    @property
    def title_label(self) -> str:
        return self.label[:1].upper() + self.label[1:]


class BatchProcessor:
    def __init__(self, store: StoreClient, spec: CollectionSpec) -> None:
        self._store = store
        self._spec = spec
        self._handlers: dict[OperationType, Callable[[BatchOperation], Awaitable[ItemResult]]] = {
            OperationType.CREATE: self._create,
            OperationType.UPDATE: self._update,
            OperationType.DELETE: self._delete,
        }
        missing = set(OperationType) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No batch handler for: {sorted(m.value for m in missing)}")

    async def run(self, operations: Sequence[BatchOperation]) -> dict[str, Any]:
        results: list[ItemResult] = []
        for op in operations:
            results.append(await self._apply(op))

        successful = sum(1 for r in results if r.success)
        summary = {
            "total": len(operations),
            "successful": successful,
            "failed": len(results) - successful,
        }
        logger.info(
            "batch_done collection=%s total=%s successful=%s failed=%s",
            self._spec.table,
            summary["total"],
            summary["successful"],
            summary["failed"],
        )
        return {"results": [r.to_dict() for r in results], "summary": summary}

    async def _apply(self, op: BatchOperation) -> ItemResult:
        handler = self._handlers[op.operation]
        try:
            result = await handler(op)
        except Exception as exc:
            logger.warning(
                "batch_item_failed collection=%s operation=%s id=%s error=%s",
                self._spec.table,
                op.operation.value,
                op.id,
                exc,
            )
            return ItemResult(
                success=False,
                operation=op.operation,
                id=op.id,
                error=str(exc) or exc.__class__.__name__,
            )
        logger.debug(
            "batch_item collection=%s operation=%s id=%s success=%s",
            self._spec.table,
            op.operation.value,
            result.id,
            result.success,
        )
        return result

    def _fail(self, op: BatchOperation, message: str, *, with_id: bool = False) -> ItemResult:
        return ItemResult(
            success=False,
            operation=op.operation,
            id=op.id if with_id else None,
            error=message,
        )

    def _check(self, fields: dict[str, Any]) -> str | None:
        if self._spec.check_fields is None:
            return None
        return self._spec.check_fields(fields)

    async def _create(self, op: BatchOperation) -> ItemResult:
        provided = op.changes()
        for name, label in self._spec.required_on_create.items():
            if not provided.get(name):
                return self._fail(op, f"{label} is required for create operation")
        problem = self._check(provided)
        if problem:
            return self._fail(op, problem)

        row = await self._store.insert(self._spec.table, self._spec.build_create(provided))
        return ItemResult(success=True, operation=op.operation, id=row["id"], data=row)

    async def _update(self, op: BatchOperation) -> ItemResult:
        if not op.id:
            return self._fail(op, f"{self._spec.title_label} ID is required for update operation")

        changes = op.changes()
        if not changes:
            return self._fail(op, NO_FIELDS_MESSAGE, with_id=True)
        problem = self._check(changes)
        if problem:
            return self._fail(op, problem, with_id=True)

        where = [Eq("id", op.id)]
        if op.version is not None:
            where.append(Eq("version", op.version))

        rows = await self._store.update(self._spec.table, changes, where=where)
        if not rows:
            if op.version is not None:
                message = f"Version conflict - {self._spec.label} was modified by another client"
            else:
                message = f"{self._spec.title_label} not found"
            return self._fail(op, message, with_id=True)

        row = rows[0]
        return ItemResult(success=True, operation=op.operation, id=row["id"], data=row)

    async def _delete(self, op: BatchOperation) -> ItemResult:
        if not op.id:
            return self._fail(op, f"{self._spec.title_label} ID is required for delete operation")

        # An already-absent row is not an error for batch deletes.
        await self._store.delete(self._spec.table, where=[Eq("id", op.id)])
        return ItemResult(success=True, operation=op.operation, id=op.id)


async def process_batch(
    store: StoreClient,
    spec: CollectionSpec,
    operations: Sequence[BatchOperation],
) -> dict[str, Any]:
    return await BatchProcessor(store, spec).run(operations)
