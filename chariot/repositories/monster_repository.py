# File: chariot/repositories/monster_repository.py

from sqlalchemy.orm import Session

from chariot.db.models.monster import Monster
from chariot.repositories.translatable_repository import TranslatableRepository


class MonsterRepository(TranslatableRepository[Monster]):
    """Repository for Monster documents."""

    def __init__(self, session: Session):
        super().__init__(session, Monster)
