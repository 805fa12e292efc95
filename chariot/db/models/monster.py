# File: chariot/db/models/monster.py

from typing import Any, List, Mapping

from sqlalchemy import Column, Integer

from chariot.db.models.base import Base, TranslatableMixin


class Monster(TranslatableMixin, Base):
    """
    Monster reference document.

    Translation blocks hold the monster sheet (profile, challenge, stats,
    affinities, abilities, actions, spellcasting). Spellcasting entries refer
    to spells by id.
    """

    __tablename__ = "monsters"

    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


def spell_ids_in_block(block: Mapping[str, Any]) -> List[str]:
    """Spell ids listed by the spellcasting entries of one block."""
    ids: List[str] = []
    for entry in block.get("spellcasting") or []:
        ids.extend(entry.get("spells") or [])
    return ids
