"""
Record models for chips, NCPs and viruses.

Records are immutable pydantic models built once per load. Identity is
the case-insensitive name: two records with the same name compare equal
and sort together regardless of their other fields.
"""

from __future__ import annotations

import unicodedata
from abc import abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fields import ChipCategory, Element, NCPColor, Range, RecordKind, Skill

NO_DAMAGE = "--"
NO_HITS = "--"


def _nfc(value: str) -> str:
    return unicodedata.normalize("NFC", value)


class Record(BaseModel):
    """Common behaviour of every catalog record."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[RecordKind]

    name: str = Field(min_length=1, description="Display name, unique per kind")

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value: Any) -> Any:
        # stripped before the length check so a blank name is refused
        if isinstance(value, str):
            return _nfc(value.strip())
        return value

    @property
    def key(self) -> str:
        """Lookup key: the lowercased name."""
        return self.name.lower()

    @abstractmethod
    def render(self) -> str:
        """Render the record the way the source document writes it."""

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.kind == other.kind and self.key == other.key

    def __hash__(self) -> int:
        return hash((self.kind, self.key))

    def __lt__(self, other: Record) -> bool:
        return self.key < other.key

    def __str__(self) -> str:
        return self.render()


class BattleChip(Record):
    """A battlechip parsed from a pair of source lines.

    The first line carries the stat block, the second the free-text
    description from which the save clause and blight element are taken.
    """

    kind: ClassVar[RecordKind] = RecordKind.CHIP

    elements: tuple[Element, ...] = Field(min_length=1, description="Elements, in source order")
    skills: tuple[Skill, ...] = Field(
        default=(Skill.NONE,), min_length=1, description="Skills usable with the chip"
    )
    range: Range
    damage: str = Field(description="Dice expression such as '1d10', or '--'")
    category: ChipCategory = ChipCategory.STANDARD
    hits: str = Field(description="Hit count: 'N', 'N-M' or '--'")
    affliction: Element | None = Field(
        default=None, description="Blight element named in the description"
    )
    description: str = ""
    skill_target: Skill = Field(default=Skill.NONE, description="Skill the target checks with")
    skill_user: Skill = Field(default=Skill.NONE, description="Skill that sets the DC")
    raw: str = Field(default="", description="Both source lines, newline-joined")

    @field_validator("damage", "hits", "description", "raw", mode="after")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return _nfc(value)

    @property
    def has_damage(self) -> bool:
        return self.damage != NO_DAMAGE

    @property
    def save_skills(self) -> tuple[Skill, Skill]:
        """(target skill, user skill) of the save clause."""
        return self.skill_target, self.skill_user

    def stat_line(self) -> str:
        """The first source line, rebuilt from the parsed fields."""
        elements = ", ".join(e.display for e in self.elements)
        skills = ", ".join(s.abbreviation for s in self.skills)
        damage = f"{self.damage} damage" if self.has_damage else NO_DAMAGE
        hits = f"{self.hits} hit." if self.hits == "1" else f"{self.hits} hits."
        category = "" if self.category is ChipCategory.STANDARD else f"{self.category.display} | "
        return f"{self.name} - {elements} | {skills} | {self.range.display} | {damage} | {category}{hits}"

    def render(self) -> str:
        return f"{self.stat_line()}\n{self.description}"


class NCP(Record):
    """A Navi Customizer program."""

    kind: ClassVar[RecordKind] = RecordKind.NCP

    MAX_COST: ClassVar[int] = 255

    cost: int = Field(ge=0, le=255, description="Expansion bit (EB) cost")
    color: NCPColor | None = Field(default=None, description="Palette section the program is listed under")
    description: str = ""
    raw: str = ""

    @field_validator("description", "raw", mode="after")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return _nfc(value)

    def render(self) -> str:
        color = self.color.display if self.color else "--"
        return f"{self.name} - ({self.cost} EB) - {color}\n{self.description}"


class Drop(BaseModel):
    """One entry of a virus drop table."""

    model_config = ConfigDict(frozen=True)

    condition: str = Field(min_length=1, description="Roll range or condition, e.g. '1-90'")
    reward: str = Field(min_length=1, description="Chip name or currency")

    def __str__(self) -> str:
        return f"{self.condition}: {self.reward}"


class Virus(Record):
    """A virus stat block with its encounter tier."""

    kind: ClassVar[RecordKind] = RecordKind.VIRUS

    element: Element
    tier: int = Field(ge=0, le=255, description="Encounter tier (CR)")
    hp: int = Field(ge=0)
    ac: int = Field(ge=0)
    mind: int
    body: int
    spirit: int
    skills: dict[Skill, int] = Field(default_factory=dict, description="Skill bonuses")
    abilities: tuple[str, ...] | None = Field(
        default=None, description="Named abilities; None when the source lists none"
    )
    drops: tuple[Drop, ...] = ()
    description: str = ""

    @field_validator("description", mode="after")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return _nfc(value)

    def render(self) -> str:
        skills = " | ".join(f"{skill.display}: {bonus}" for skill, bonus in self.skills.items())
        abilities = ", ".join(self.abilities) if self.abilities else "None"
        drops = " | ".join(str(drop) for drop in self.drops) or "None"
        lines = [
            f"{self.name} ({self.element.display}) - CR {self.tier}",
            f"HP: {self.hp} | AC: {self.ac}",
            f"Mind: {self.mind} | Body: {self.body} | Spirit: {self.spirit}",
            skills or "None",
            f"Abilities: {abilities}",
            f"Drops: {drops}",
        ]
        if self.description:
            lines.append(self.description)
        return "\n".join(lines)


__all__ = ["Record", "BattleChip", "NCP", "Drop", "Virus", "NO_DAMAGE", "NO_HITS"]
