"""
Pydantic schemas for diagram endpoints.

Shapes and connections belong to the drawing client; the API stores them
as ordered JSON arrays without looking inside. For reference, a shape is
`{id, type, x, y, width, height, label, color?, fontSize?, imageUrl?}` and
a connection is `{id, from, to, fromAnchor, toAnchor}`.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, Field

from core.validation import PartialUpdate

JsonArray = list[dict[str, Any]]


class DiagramCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    shapes: JsonArray = Field(default_factory=list)
    connections: JsonArray = Field(default_factory=list)
    thumbnail: str | None = None


class DiagramUpdateRequest(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"thumbnail"})

    title: str | None = Field(default=None, min_length=1, max_length=500)
    shapes: JsonArray | None = None
    connections: JsonArray | None = None
    thumbnail: str | None = None
