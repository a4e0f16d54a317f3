"""
Closed enumerations used by the chip, NCP and virus records.

Every enumeration parses case-insensitively from its canonical display
string (and, for some, from a few aliases) and renders back to that
display string. Callers strip surrounding whitespace before parsing.
"""

from __future__ import annotations

from enum import Enum

from .errors import FieldParseError


class TokenEnum(str, Enum):
    """A closed set of variants parsed from short text tokens."""

    @classmethod
    def field_name(cls) -> str:
        """Name used in parse error messages."""
        return cls.__name__.lower()

    @classmethod
    def _aliases(cls) -> dict[str, TokenEnum]:
        return {}

    @classmethod
    def parse(cls, token: str):
        """Parse a token into a variant.

        Args:
            token: Token to parse, matched case-insensitively

        Returns:
            The matching variant

        Raises:
            FieldParseError: If the token names no variant (including "")
        """
        lowered = token.lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        alias = cls._aliases().get(lowered)
        if alias is not None:
            return alias
        raise FieldParseError(cls.field_name(), token)

    @property
    def display(self) -> str:
        """Canonical display form; parses back to the same variant."""
        return self.value

    def __str__(self) -> str:
        return self.value


class Element(TokenEnum):
    """Elemental affinity of a chip or virus."""

    FIRE = "Fire"
    AQUA = "Aqua"
    ELEC = "Elec"
    WOOD = "Wood"
    WIND = "Wind"
    SWORD = "Sword"
    BREAK = "Break"
    CURSOR = "Cursor"
    RECOVERY = "Recovery"
    INVIS = "Invis"
    OBJECT = "Object"
    NULL = "Null"

    @property
    def order(self) -> int:
        """Position in declaration order, used for stable sorting."""
        return list(Element).index(self)


class SkillGroup(TokenEnum):
    """The three ability scores skills belong to."""

    MIND = "Mind"
    BODY = "Body"
    SPIRIT = "Spirit"


class Skill(TokenEnum):
    """A skill named on a chip line or a virus stat block.

    ``NONE`` is the default when no skill applies; it displays as ``--``
    and also parses from ``none``. ``VARIES`` marks chips usable with
    more than one skill.
    """

    SENSE = "Sense"
    INFO = "Info"
    TECH = "Tech"
    STRENGTH = "Strength"
    AGILITY = "Agility"
    ENDURANCE = "Endurance"
    CHARM = "Charm"
    VALOR = "Valor"
    AFFINITY = "Affinity"
    VARIES = "Varies"
    NONE = "--"

    @classmethod
    def _aliases(cls) -> dict[str, TokenEnum]:
        aliases: dict[str, TokenEnum] = {
            abbreviation.lower(): skill
            for skill, abbreviation in _SKILL_ABBREVIATIONS.items()
        }
        aliases.update(_SKILL_ALTERNATE_NAMES)
        aliases["none"] = cls.NONE
        return aliases

    @property
    def abbreviation(self) -> str:
        """Fixed short code used in compact renderings (e.g. ``TCH``)."""
        return _SKILL_ABBREVIATIONS[self]

    @property
    def group(self) -> SkillGroup | None:
        """Ability score the skill falls under; None for NONE and VARIES."""
        return _SKILL_GROUPS.get(self)


_SKILL_ABBREVIATIONS: dict[Skill, str] = {
    Skill.SENSE: "SNS",
    Skill.INFO: "INF",
    Skill.TECH: "TCH",
    Skill.STRENGTH: "STR",
    Skill.AGILITY: "AGI",
    Skill.ENDURANCE: "END",
    Skill.CHARM: "CHM",
    Skill.VALOR: "VLR",
    Skill.AFFINITY: "AFF",
    Skill.VARIES: "VAR",
    Skill.NONE: "--",
}

# Names used by other editions of the rules for the same skills
_SKILL_ALTERNATE_NAMES: dict[str, Skill] = {
    "coding": Skill.TECH,
    "speed": Skill.AGILITY,
    "stamina": Skill.ENDURANCE,
    "bravery": Skill.VALOR,
}

_SKILL_GROUPS: dict[Skill, SkillGroup] = {
    Skill.SENSE: SkillGroup.MIND,
    Skill.INFO: SkillGroup.MIND,
    Skill.TECH: SkillGroup.MIND,
    Skill.STRENGTH: SkillGroup.BODY,
    Skill.AGILITY: SkillGroup.BODY,
    Skill.ENDURANCE: SkillGroup.BODY,
    Skill.CHARM: SkillGroup.SPIRIT,
    Skill.VALOR: SkillGroup.SPIRIT,
    Skill.AFFINITY: SkillGroup.SPIRIT,
}


class Range(TokenEnum):
    """Targeting range of a chip."""

    SELF = "Self"
    CLOSE = "Close"
    NEAR = "Near"
    FAR = "Far"
    VARIES = "Varies"


class ChipCategory(TokenEnum):
    """Rarity tier of a chip. Standard chips omit the tier on their line."""

    STANDARD = "Standard"
    MEGA = "Mega"
    GIGA = "Giga"
    DARK = "Dark"
    SUPPORT = "Support"

    @classmethod
    def field_name(cls) -> str:
        return "chip category"


class NCPColor(TokenEnum):
    """Colour palette of Navi Customizer programs."""

    WHITE = "White"
    PINK = "Pink"
    YELLOW = "Yellow"
    GREEN = "Green"
    BLUE = "Blue"
    RED = "Red"
    GRAY = "Gray"

    @classmethod
    def field_name(cls) -> str:
        return "NCP color"

    @classmethod
    def is_header(cls, line: str) -> bool:
        """Whether a source line is a palette section header."""
        try:
            cls.parse(line.strip())
        except FieldParseError:
            return False
        return True


class RecordKind(TokenEnum):
    """Kind tag of a record in the unified catalog."""

    CHIP = "chip"
    NCP = "ncp"
    VIRUS = "virus"

    @classmethod
    def field_name(cls) -> str:
        return "record kind"

    @property
    def collision_suffix(self) -> str:
        """Suffix appended to a name that collides with another kind."""
        return _COLLISION_SUFFIXES[self]

    @property
    def label(self) -> str:
        """Human-facing label for disambiguation lists."""
        return _KIND_LABELS[self]


_COLLISION_SUFFIXES: dict[RecordKind, str] = {
    RecordKind.CHIP: "_c",
    RecordKind.NCP: "_n",
    RecordKind.VIRUS: "_v",
}

_KIND_LABELS: dict[RecordKind, str] = {
    RecordKind.CHIP: "BattleChip",
    RecordKind.NCP: "NCP",
    RecordKind.VIRUS: "Virus",
}


__all__ = [
    "TokenEnum",
    "Element",
    "SkillGroup",
    "Skill",
    "Range",
    "ChipCategory",
    "NCPColor",
    "RecordKind",
]
