# chariot/api/deps.py
"""
FastAPI dependencies for Chariot.

Provides dependency functions for database sessions and service injection
for API routes.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from chariot.core.config import settings
from chariot.db.session import get_db
from chariot.repositories.monster_repository import MonsterRepository
from chariot.repositories.spell_repository import SpellRepository
from chariot.services.localization_service import LocalizationService
from chariot.services.monster_service import MonsterService
from chariot.services.spell_service import SpellService

logger = logging.getLogger(__name__)

__all__ = [
    "get_db",
    "get_localization_service",
    "get_spell_service",
    "get_monster_service",
]


def get_localization_service() -> LocalizationService:
    """Injector providing LocalizationService configured with the default locale."""
    logger.debug("Providing LocalizationService instance.")
    return LocalizationService(default_locale=settings.DEFAULT_LOCALE)


def get_spell_service(
    db: Session = Depends(get_db),
    localization_service: LocalizationService = Depends(get_localization_service),
) -> SpellService:
    """Injector providing SpellService with session."""
    logger.debug("Providing SpellService instance.")
    return SpellService(
        session=db,
        repository=SpellRepository(session=db),
        localization_service=localization_service,
    )


def get_monster_service(
    db: Session = Depends(get_db),
    localization_service: LocalizationService = Depends(get_localization_service),
) -> MonsterService:
    """Injector providing MonsterService with session."""
    logger.debug("Providing MonsterService instance.")
    return MonsterService(
        session=db,
        repository=MonsterRepository(session=db),
        spell_repository=SpellRepository(session=db),
        localization_service=localization_service,
    )
