# File: chariot/services/monster_service.py

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from chariot.core.exceptions import ValidationException
from chariot.core.translations import TranslationMap
from chariot.db.models.monster import Monster, spell_ids_in_block
from chariot.repositories.monster_repository import MonsterRepository
from chariot.repositories.spell_repository import SpellRepository
from chariot.services.localization_service import LocalizationService
from chariot.services.translatable_service import TranslatableService

logger = logging.getLogger(__name__)


class MonsterService(TranslatableService[Monster]):
    """
    Service for monsters.

    Spellcasting entries store spell ids. Writes check that every id names a
    live spell; reads replace the ids with spell summaries in the language
    each block is served in.
    """

    entity_type = "Monster"

    def __init__(
        self,
        session: Session,
        repository: Optional[MonsterRepository] = None,
        spell_repository: Optional[SpellRepository] = None,
        localization_service: Optional[LocalizationService] = None,
    ):
        super().__init__(session, repository or MonsterRepository(session), localization_service)
        self.spell_repository = spell_repository or SpellRepository(session)

    def _validate_content(self, tmap: TranslationMap, lang: str, content: Dict[str, Any]) -> None:
        spell_ids = spell_ids_in_block(content)
        if not spell_ids:
            return

        existing = self.spell_repository.find_existing_ids(spell_ids)
        missing = [spell_id for spell_id in dict.fromkeys(spell_ids) if spell_id not in existing]
        if missing:
            message = f"Spells not found: {', '.join(missing)}"
            logger.error(message)
            raise ValidationException(message, {"spellcasting.spells": [f"unknown spell id {m}" for m in missing]})

        logger.debug(f"Validated {len(existing)} spell reference(s) for '{lang}'")

    def _present(self, entities: List[Monster], languages: List[Optional[List[str]]]) -> List[Dict[str, Any]]:
        rendered = super()._present(entities, languages)

        spell_ids = set()
        for document in rendered:
            for block in document["translations"].values():
                spell_ids.update(spell_ids_in_block(block))
        if not spell_ids:
            return rendered

        spells_by_id = {spell.id: spell for spell in self.spell_repository.get_many(spell_ids)}
        for document in rendered:
            document["translations"] = {
                lang: self.localization.populate_spellcasting(block, lang, spells_by_id)
                for lang, block in document["translations"].items()
            }
        return rendered
