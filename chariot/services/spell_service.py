# File: chariot/services/spell_service.py

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from chariot.core.exceptions import ValidationException
from chariot.core.translations import TranslationMap
from chariot.db.models.spell import Spell
from chariot.repositories.spell_repository import SpellRepository
from chariot.services.localization_service import LocalizationService
from chariot.services.translatable_service import TranslatableService

logger = logging.getLogger(__name__)


class SpellService(TranslatableService[Spell]):
    """
    Service for spells.

    Every translation of a spell must list the same number of components
    as the spell's first active translation.
    """

    entity_type = "Spell"

    def __init__(
        self,
        session: Session,
        repository: Optional[SpellRepository] = None,
        localization_service: Optional[LocalizationService] = None,
    ):
        super().__init__(session, repository or SpellRepository(session), localization_service)

    def _validate_content(self, tmap: TranslationMap, lang: str, content: Dict[str, Any]) -> None:
        reference = next(
            (block for code, block in tmap.active_items() if code != lang),
            None,
        )
        if reference is None or reference.get("components") is None:
            return

        expected = len(reference["components"])
        actual = len(content.get("components") or [])
        if expected != actual:
            message = (
                f"Components count mismatch: translation '{lang}' has {actual} component(s) "
                f"but existing translations have {expected} component(s)"
            )
            logger.error(message)
            raise ValidationException(message, {"components": [f"expected {expected} component(s)"]})
