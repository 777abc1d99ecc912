"""
Pydantic schemas for bookmark endpoints.
"""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import BaseModel, Field

from batch.schemas import BatchOperation, operations_field
from core.validation import HttpUrlStr, PartialUpdate

BookmarkStatus = Literal["unread", "read", "archived"]


class BookmarkCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=2000)
    url: HttpUrlStr
    tags: str | None = None
    status: BookmarkStatus = "unread"
    is_favorite: bool = False


class BookmarkUpdateRequest(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"tags"})

    title: str | None = Field(default=None, min_length=1, max_length=2000)
    url: HttpUrlStr | None = None
    tags: str | None = None
    status: BookmarkStatus | None = None
    is_favorite: bool | None = None


class BookmarkOperation(BatchOperation):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"tags"})

    title: str | None = None
    url: str | None = None
    tags: str | None = None
    status: BookmarkStatus | None = None
    is_favorite: bool | None = None


class BookmarkBatchRequest(BaseModel):
    operations: list[BookmarkOperation] = operations_field()
