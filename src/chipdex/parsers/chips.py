"""
BattleChip parser.

Chips come in line pairs. The first line is the stat block::

    Airshot - Wind | Tech, Agility | Near | 1d10 damage | 1 hit.
    Cannon - Null | Tech | Far | 4d6 damage | Mega | 1 hit.

The second line is free text. Two optional clauses are read from it: the
save clause ("an Agility check of [DC 10 + Tech]") and the blight clause
("blight (Fire)"). Neither clause can make a chip fail to parse.
"""

from __future__ import annotations

import logging
import re

from pydantic import ValidationError

from ..errors import FieldParseError, RecordParseError
from ..fields import ChipCategory, Element, Range, Skill
from ..models import BattleChip
from ..reports import RejectedRecord

logger = logging.getLogger("chipdex")

CHIP_LINE_RE = re.compile(
    r"""
    ^\s*(?P<name>.+?)\s-\s
    (?P<elements>.+?)\s\|\s
    (?P<skills>.+?)\s\|\s
    (?P<range>.+?)\s\|\s
    (?P<damage>\d+d\d+|--)\s?(?:damage)?\s?\|?\s?
    (?P<category>standard|mega|giga|dark|support)?\s\|\s
    (?P<hits>\d+-\d+|\d+|--)\s?hits?\.?\s*$
    """,
    re.VERBOSE | re.IGNORECASE,
)

SAVE_RE = re.compile(r"[Aa]n?\s(\w+)\scheck\sof\s\[DC\s\d+\s\+\s(\w+)\]")
BLIGHT_RE = re.compile(r"blight\s*\((\w+)\)", re.IGNORECASE)


def _split_tokens(text: str) -> list[str]:
    return [token.strip() for token in text.split(",")]


def parse_elements(text: str) -> tuple[Element, ...]:
    """Parse a comma-separated element list."""
    return tuple(Element.parse(token) for token in _split_tokens(text))


def parse_skills(text: str) -> tuple[Skill, ...]:
    """Parse a comma-separated skill list."""
    return tuple(Skill.parse(token) for token in _split_tokens(text))


def _lenient_skill(token: str) -> Skill:
    try:
        return Skill.parse(token)
    except FieldParseError:
        return Skill.NONE


def parse_save(description: str) -> tuple[Skill, Skill]:
    """Extract (target skill, user skill) from the first save clause.

    Both default to ``Skill.NONE`` when there is no clause; a clause naming
    an unknown skill falls back to NONE for that skill only.
    """
    match = SAVE_RE.search(description)
    if not match:
        return Skill.NONE, Skill.NONE
    return _lenient_skill(match.group(1)), _lenient_skill(match.group(2))


def parse_affliction(description: str) -> Element | None:
    """Extract the blight element from the first blight clause.

    Returns None when there is no clause and ``Element.NULL`` when the
    clause names something that is not an element.
    """
    match = BLIGHT_RE.search(description)
    if not match:
        return None
    try:
        return Element.parse(match.group(1))
    except FieldParseError:
        return Element.NULL


def parse_chip(first_line: str, second_line: str) -> BattleChip:
    """Build a BattleChip from its two source lines.

    Raises:
        RecordParseError: If the stat line does not match the grammar or one
            of its fields is not a recognised token
    """
    lines = [first_line, second_line]
    match = CHIP_LINE_RE.match(first_line)
    if not match:
        raise RecordParseError("chip line does not match the expected format", lines)

    try:
        elements = parse_elements(match["elements"])
        skills = parse_skills(match["skills"])
        chip_range = Range.parse(match["range"].strip())
        category = (
            ChipCategory.parse(match["category"]) if match["category"] else ChipCategory.STANDARD
        )
    except FieldParseError as e:
        raise RecordParseError(f"bad chip field: {e}", lines, e.details) from e

    skill_target, skill_user = parse_save(second_line)

    try:
        return BattleChip(
            name=match["name"],
            elements=elements,
            skills=skills,
            range=chip_range,
            damage=match["damage"],
            category=category,
            hits=match["hits"],
            affliction=parse_affliction(second_line),
            description=second_line,
            skill_target=skill_target,
            skill_user=skill_user,
            raw=f"{first_line}\n{second_line}",
        )
    except ValidationError as e:
        raise RecordParseError(f"invalid chip: {e.errors()[0]['msg']}", lines) from e


def parse_chip_lines(lines: list[str]) -> tuple[list[BattleChip], list[RejectedRecord]]:
    """Parse non-blank chip lines pairwise.

    Returns:
        The chips in source order and the pairs that were rejected. An
        unpaired trailing line is rejected.
    """
    chips: list[BattleChip] = []
    rejected: list[RejectedRecord] = []
    for i in range(0, len(lines), 2):
        pair = lines[i:i + 2]
        if len(pair) < 2:
            rejected.append(RejectedRecord("chip has no description line", pair))
            continue
        try:
            chips.append(parse_chip(pair[0], pair[1]))
        except RecordParseError as e:
            logger.debug(f"Rejected chip: {e}")
            rejected.append(RejectedRecord(e.message, e.lines))
    return chips, rejected


__all__ = [
    "CHIP_LINE_RE",
    "SAVE_RE",
    "BLIGHT_RE",
    "parse_elements",
    "parse_skills",
    "parse_save",
    "parse_affliction",
    "parse_chip",
    "parse_chip_lines",
]
