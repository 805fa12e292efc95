# File: chariot/repositories/spell_repository.py

from sqlalchemy.orm import Session

from chariot.db.models.spell import Spell
from chariot.repositories.translatable_repository import TranslatableRepository


class SpellRepository(TranslatableRepository[Spell]):
    """Repository for Spell documents."""

    def __init__(self, session: Session):
        super().__init__(session, Spell)
