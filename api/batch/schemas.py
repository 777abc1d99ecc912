"""
Batch request items and per-item results.

Resource packages subclass `BatchOperation` with their writable fields and
wrap it in an envelope model with `operations: list[...]` (1..100 items).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from pydantic import Field

from core.validation import PartialUpdate

MAX_BATCH_OPERATIONS = 100


class OperationType(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class BatchOperation(PartialUpdate):
    CONTROL: ClassVar[frozenset[str]] = frozenset({"operation", "id", "version"})

    operation: OperationType
    id: str | None = None
    version: int | None = None


def operations_field() -> Any:
    return Field(..., min_length=1, max_length=MAX_BATCH_OPERATIONS)


@dataclass(frozen=True)
class ItemResult:
    success: bool
    operation: OperationType
    id: str | None = None
    error: str | None = None
    data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success, "operation": self.operation.value}
        if self.id is not None:
            out["id"] = self.id
        if self.error is not None:
            out["error"] = self.error
        if self.data is not None:
            out["data"] = self.data
        return out
