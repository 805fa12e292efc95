# File: chariot/schemas/monster.py
"""
Monster schemas for the Chariot API.

This module contains Pydantic models for the monster sheet stored in each
translation block. Spellcasting entries reference spells by id; reads
replace those ids with spell summaries.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

MonsterSize = Literal["Tiny", "Small", "Medium", "Large", "Huge", "Gargantuan"]


class Profile(BaseModel):
    type: Optional[str] = Field(None, examples=["dragon"])
    subtype: Optional[str] = None
    alignment: Optional[str] = Field(None, examples=["chaotic evil"])


class Challenge(BaseModel):
    challenge_rating: Optional[float] = Field(None, ge=0, examples=[17])
    experience_points: Optional[int] = Field(None, ge=0, examples=[18000])


class Speed(BaseModel):
    walk: Optional[int] = None
    climb: Optional[int] = None
    swim: Optional[int] = None
    fly: Optional[int] = None
    burrow: Optional[int] = None


class AbilityScores(BaseModel):
    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10


class SavingThrows(BaseModel):
    strength: int = 0
    dexterity: int = 0
    constitution: int = 0
    intelligence: int = 0
    wisdom: int = 0
    charisma: int = 0


class Skills(BaseModel):
    athletics: int = 0
    acrobatics: int = 0
    sleight_of_hand: int = 0
    stealth: int = 0
    arcana: int = 0
    history: int = 0
    investigation: int = 0
    nature: int = 0
    religion: int = 0
    animal_handling: int = 0
    insight: int = 0
    medicine: int = 0
    perception: int = 0
    survival: int = 0
    deception: int = 0
    intimidation: int = 0
    performance: int = 0
    persuasion: int = 0


class Sense(BaseModel):
    name: str = ""
    value: int = 0


class Stats(BaseModel):
    size: MonsterSize
    max_hit_points: int = Field(0, ge=0)
    current_hit_points: Optional[int] = None
    temp_hit_points: int = 0
    armor_class: int = 0
    speed: Speed = Field(default_factory=Speed)
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
    languages: List[str] = []
    passive_perception: int = 0
    saving_throws: SavingThrows = Field(default_factory=SavingThrows)
    skills: Skills = Field(default_factory=Skills)
    senses: List[Sense] = []


class Affinities(BaseModel):
    resistances: List[str] = []
    immunities: List[str] = []
    vulnerabilities: List[str] = []


class Ability(BaseModel):
    name: str
    description: str


class ActionDamage(BaseModel):
    dice: Optional[str] = Field(None, examples=["2d10+8"])
    type: Optional[str] = Field(None, examples=["piercing"])


class ActionSave(BaseModel):
    type: str = Field(..., description="str, dex, con, int, wis or cha")
    dc: int
    success_type: Optional[str] = Field(None, description="none, half, ...")


class ActionUsage(BaseModel):
    type: str = Field(..., description="at will, per day, recharge, ...")
    times: Optional[int] = None
    dice: Optional[str] = None
    min_value: Optional[int] = None


class Action(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    attack_bonus: Optional[int] = None
    damage: ActionDamage = Field(default_factory=ActionDamage)
    range: Optional[str] = None
    save: Optional[ActionSave] = None
    description: Optional[str] = None
    usage: Optional[ActionUsage] = None
    legendary_action_cost: Optional[int] = None


class Actions(BaseModel):
    standard: List[Action] = []
    legendary: List[Action] = []
    legendary_actions_per_day: Optional[int] = None
    lair: List[Action] = []
    reactions: List[Action] = []
    bonus: List[Action] = []


class SpellSlot(BaseModel):
    total: int = Field(0, ge=0)
    used: int = Field(0, ge=0)


class Spellcasting(BaseModel):
    ability: Optional[str] = None
    save_dc: Optional[int] = None
    attack_bonus: int = 0
    spell_slots_by_level: Dict[str, SpellSlot] = {}
    total_slots: int = 0
    spells: List[str] = Field(default_factory=list, description="Spell ids")


class MonsterContent(BaseModel):
    name: str = Field(..., min_length=1, examples=["Adult Red Dragon"])
    profile: Profile = Field(default_factory=Profile)
    challenge: Challenge = Field(default_factory=Challenge)
    stats: Stats
    affinities: Affinities = Field(default_factory=Affinities)
    abilities: List[Ability] = []
    actions: Actions = Field(default_factory=Actions)
    spellcasting: List[Spellcasting] = []


class MonsterContentUpdate(BaseModel):
    """Partial update; nested structures are replaced as a whole."""

    name: Optional[str] = Field(None, min_length=1)
    profile: Optional[Profile] = None
    challenge: Optional[Challenge] = None
    stats: Optional[Stats] = None
    affinities: Optional[Affinities] = None
    abilities: Optional[List[Ability]] = None
    actions: Optional[Actions] = None
    spellcasting: Optional[List[Spellcasting]] = None

    @field_validator(
        "name", "profile", "challenge", "stats", "affinities", "abilities", "actions", "spellcasting"
    )
    @classmethod
    def validate_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class MonsterCreate(BaseModel):
    lang: str = Field(..., description="Language of the initial translation", examples=["en"])
    content: MonsterContent
