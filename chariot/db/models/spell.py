# File: chariot/db/models/spell.py

from sqlalchemy import Column, Integer

from chariot.db.models.base import Base, TranslatableMixin


class Spell(TranslatableMixin, Base):
    """
    Spell reference document.

    Each translation block carries the full spell description for one
    language: name, description, level, school, casting_time, range,
    components, duration, effect_type, damage and healing.
    """

    __tablename__ = "spells"

    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
