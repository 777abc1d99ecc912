"""
Pydantic schemas for code-snippet endpoints.

Presentation fields default to the editor's stock look.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.validation import PartialUpdate

DEFAULT_BACKGROUND = "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"


class CodeSnippetCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    code: str = Field(..., min_length=1)
    language: str = "javascript"
    theme: str = "dracula"
    background_type: str = "gradient"
    background_value: str = DEFAULT_BACKGROUND
    padding: int = Field(default=64, ge=0, le=512)
    show_line_numbers: bool = True
    font_family: str = "Fira Code"
    font_size: int = Field(default=14, ge=1, le=200)
    window_style: str = "mac"


class CodeSnippetUpdateRequest(PartialUpdate):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    code: str | None = Field(default=None, min_length=1)
    language: str | None = None
    theme: str | None = None
    background_type: str | None = None
    background_value: str | None = None
    padding: int | None = Field(default=None, ge=0, le=512)
    show_line_numbers: bool | None = None
    font_family: str | None = None
    font_size: int | None = Field(default=None, ge=1, le=200)
    window_style: str | None = None
