# File: chariot/db/models/base.py
"""
Base models and mixins for the Chariot reference API.

This module provides the foundation for all database models, including:
- Base SQLAlchemy model class
- Timestamp mixin maintained by the persistence layer
- Translatable document mixin shared by spells and monsters
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import JSON, Column, DateTime, Integer, MetaData, String
from sqlalchemy.orm import declarative_base

from chariot.core.exceptions import ValidationException
from chariot.core.translations import TranslationMap

# Create the SQLAlchemy base
Base = declarative_base(metadata=MetaData())


def generate_id() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    """
    Mixin providing automatic timestamp functionality.

    Adds created_at and updated_at timestamps that are automatically
    maintained when records are created or updated.
    """

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class TranslatableMixin(TimestampMixin):
    """
    Mixin for documents whose content is stored per language.

    `translations` holds the full JSON map (soft-deleted blocks included) and
    `languages` mirrors its active keys in insertion order. Both columns are
    only ever replaced wholesale through `apply_translation_map`, never
    mutated in place, so SQLAlchemy always sees the change.
    """

    id = Column(String(36), primary_key=True, default=generate_id)
    tag = Column(Integer, nullable=False, default=0)
    languages = Column(JSON, nullable=False, default=list)
    translations = Column(JSON, nullable=False, default=dict)
    deleted_at = Column(DateTime, nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def translation_map(self) -> TranslationMap:
        return TranslationMap(self.translations or {})

    def apply_translation_map(self, tmap: TranslationMap) -> None:
        """
        Write a translation map back onto the entity.

        Raises:
            ValidationException: If the map has no active translation left
        """
        active = tmap.active_languages()
        if not active:
            raise ValidationException(
                f"{self.__class__.__name__} must keep at least one active translation",
                {"translations": ["at least one active translation is required"]},
            )
        self.translations = tmap.to_dict()
        self.languages = active

    def to_dict(self, languages: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """
        Convert the document to a dictionary.

        Args:
            languages: Restrict `translations` to these active languages.
                       All active translations are kept when omitted.

        Returns:
            Dictionary representation of the document
        """
        tmap = self.translation_map()
        result: Dict[str, Any] = {
            "id": self.id,
            "tag": self.tag,
            "languages": list(self.languages or []),
            "translations": {
                lang: dict(block) for lang, block in tmap.active_items(languages)
            },
        }
        for name in ("created_at", "updated_at", "deleted_at"):
            value = getattr(self, name)
            result[name] = value.isoformat() if isinstance(value, datetime) else value
        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id!r}, tag={self.tag}, languages={self.languages})>"
