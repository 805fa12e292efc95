# File: chariot/schemas/common.py
"""
Shared response envelopes and translation schemas for the Chariot API.

Every endpoint answers with `{message, data}`; list endpoints add a
`pagination` block.
"""

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    message: str = Field(..., description="Outcome message, including the elapsed time")
    data: T


class Pagination(BaseModel):
    page: int = Field(..., ge=0, description="Zero-based page number")
    offset: int = Field(..., ge=1, description="Page size")
    total_items: int = Field(..., ge=0, alias="totalItems", description="Number of matching documents")

    model_config = ConfigDict(populate_by_name=True)


class PaginatedResponse(BaseModel, Generic[T]):
    message: str
    data: List[T]
    pagination: Pagination


class InvalidParam(BaseModel):
    """One rejected request parameter."""

    name: str
    reason: str


class TranslatableDocument(BaseModel):
    """
    A spell or monster as returned by the API.

    `languages` lists every active language of the document while
    `translations` only carries the projected subset.
    """

    id: str
    tag: int
    languages: List[str]
    translations: Dict[str, Dict[str, Any]]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


class TranslationSummary(BaseModel):
    lang: str = Field(..., description="Language code", examples=["en"])
    srd: bool
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TranslationDeleted(BaseModel):
    deleted_language: str
    remaining_languages: List[str]


class TagUpdate(BaseModel):
    """Request body for changing a document's certification tag."""

    tag: int = Field(..., ge=0, le=1, description="0 = homebrew, 1 = certified")
