# File: chariot/schemas/search_params.py
"""
Search parameter schemas for the Chariot API.

Language codes are accepted as free strings here; the search builder owns
their validation so that a malformed code yields the domain error.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TranslatableSearchParams(BaseModel):
    """
    Search parameters shared by spells and monsters.
    """
    name: Optional[str] = Field(None, description="Case-insensitive substring of a translation name")
    lang: Optional[str] = Field(None, description="Restrict to one language (2-letter ISO code)")
    sort: Optional[str] = Field(None, description="Sort field, '-' prefix for descending")
    page: int = Field(0, ge=0, description="Zero-based page number")
    offset: Optional[int] = Field(None, ge=1, description="Page size")
