"""
Pydantic schemas for note endpoints.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field

from batch.schemas import BatchOperation, operations_field
from core.validation import PartialUpdate


class NoteCreateRequest(BaseModel):
    title: str = ""
    content: str = ""
    tags: str | None = None
    is_favorite: bool = False


class NoteUpdateRequest(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"tags"})
    CONTROL: ClassVar[frozenset[str]] = frozenset({"version"})

    title: str | None = None
    content: str | None = None
    tags: str | None = None
    is_favorite: bool | None = None
    # When present, the write only applies if the stored row is at this version.
    version: int | None = Field(default=None, ge=1)


class NoteOperation(BatchOperation):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"tags"})

    title: str | None = None
    content: str | None = None
    tags: str | None = None
    is_favorite: bool | None = None


class NoteBatchRequest(BaseModel):
    operations: list[NoteOperation] = operations_field()
