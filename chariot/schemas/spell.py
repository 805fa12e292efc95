# File: chariot/schemas/spell.py
"""
Spell schemas for the Chariot API.

`SpellContent` is the body accepted when creating a spell or adding a
translation; `SpellContentUpdate` is its partial counterpart. Neither
exposes `srd`: new content is always homebrew and SRD content is immutable.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

SpellComponent = Literal["V", "S", "M"]


def _check_components(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is not None and len(set(v)) != len(v):
        raise ValueError("Components must not repeat")
    return v


class SpellContent(BaseModel):
    name: str = Field(..., min_length=1, examples=["Fireball"])
    description: str = Field(
        ...,
        examples=["A bright streak flashes from your pointing finger to a point you choose within range."],
    )
    level: int = Field(..., ge=0, le=9, examples=[3])
    school: Optional[str] = Field(None, examples=["Evocation"])
    casting_time: Optional[str] = Field(None, examples=["1 action"])
    range: Optional[str] = Field(None, examples=["150 feet"])
    components: List[SpellComponent] = Field(default_factory=list, max_length=3, examples=[["V", "S", "M"]])
    duration: Optional[str] = Field(None, examples=["Instantaneous"])
    effect_type: Optional[int] = Field(None, examples=[0])
    damage: Optional[str] = Field(None, examples=["8d6"])
    healing: Optional[str] = None

    @field_validator("components")
    @classmethod
    def validate_components(cls, v):
        return _check_components(v)


class SpellContentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    level: Optional[int] = Field(None, ge=0, le=9)
    school: Optional[str] = None
    casting_time: Optional[str] = None
    range: Optional[str] = None
    components: Optional[List[SpellComponent]] = Field(None, max_length=3)
    duration: Optional[str] = None
    effect_type: Optional[int] = None
    damage: Optional[str] = None
    healing: Optional[str] = None

    @field_validator("name", "description", "level", "components")
    @classmethod
    def validate_not_null(cls, v, info):
        # Fields that are mandatory on create may be omitted here, not nulled
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("components")
    @classmethod
    def validate_components(cls, v):
        return _check_components(v)


class SpellCreate(BaseModel):
    lang: str = Field(..., description="Language of the initial translation", examples=["en"])
    content: SpellContent
