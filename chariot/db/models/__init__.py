"""
Initializes the models package for SQLAlchemy declarative base.

Importing the model classes here ensures that SQLAlchemy's metadata is
populated with all table definitions when `Base.metadata.create_all()` is
called.
"""

from chariot.db.models.base import Base, TimestampMixin, TranslatableMixin
from chariot.db.models.monster import Monster
from chariot.db.models.spell import Spell

__all__ = [
    "Base",
    "TimestampMixin",
    "TranslatableMixin",
    "Spell",
    "Monster",
]
