# File: chariot/schemas/__init__.py
"""
Schemas package for the Chariot API.

This module exports Pydantic models used for request validation and
response serialization.
"""

from .common import (
    ApiResponse,
    InvalidParam,
    PaginatedResponse,
    Pagination,
    TagUpdate,
    TranslatableDocument,
    TranslationDeleted,
    TranslationSummary,
)
from .monster import MonsterContent, MonsterContentUpdate, MonsterCreate
from .search_params import TranslatableSearchParams
from .spell import SpellContent, SpellContentUpdate, SpellCreate

__all__ = [
    # Envelopes
    "ApiResponse", "PaginatedResponse", "Pagination", "InvalidParam",

    # Translations
    "TranslatableDocument", "TranslationSummary", "TranslationDeleted", "TagUpdate",

    # Spells
    "SpellContent", "SpellContentUpdate", "SpellCreate",

    # Monsters
    "MonsterContent", "MonsterContentUpdate", "MonsterCreate",

    # Search
    "TranslatableSearchParams",
]
