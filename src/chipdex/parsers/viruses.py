"""
Virus compendium parser.

The compendium is a stream of tier headers, virus headers, fixed-position
stat blocks and free-text description lines::

    CR 1
    Mettaur (Elec)
    HP: 40 | AC: 12
    Mind: 4 | Body: 6 | Spirit: 2
    Tech: 2 | Agility: 1
    Abilities: None
    Drops: 1-90: Zenny | 91-100: Airshot
    A hard-hatted virus that hides under its helmet.

The stream is read by a line cursor moving through three states. A bad
stat block rejects that virus only and the cursor resynchronises at the
next header. Running out of lines inside a stat block, a missing first
tier header and a tier going backwards abort the whole parse.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError

from ..errors import (
    FieldParseError,
    MissingTierHeaderError,
    RecordParseError,
    TierOrderError,
    TruncatedRecordError,
)
from ..fields import Element, Skill
from ..models import Drop, Virus
from ..reports import RejectedRecord

logger = logging.getLogger("chipdex")

TIER_HEADER_RE = re.compile(r"^\s*CR\s+(\d+)\s*$")
VIRUS_HEADER_RE = re.compile(r"^\s*(?P<name>.+?)\s*\((?P<element>\w+)\)\s*$")
STATS_START_RE = re.compile(r"^\s*HP\s*:", re.IGNORECASE)
HP_AC_RE = re.compile(r"^\s*HP:\s*(?P<hp>\d+)\s*\|\s*AC:\s*(?P<ac>\d+)\s*$", re.IGNORECASE)
SCORES_RE = re.compile(
    r"^\s*Mind:\s*(?P<mind>-?\d+)\s*\|\s*Body:\s*(?P<body>-?\d+)\s*\|\s*Spirit:\s*(?P<spirit>-?\d+)\s*$",
    re.IGNORECASE,
)
SKILL_ENTRY_RE = re.compile(r"^\s*(?P<skill>[^:]+?)\s*:\s*(?P<bonus>[+-]?\d+)\s*$")
ABILITIES_RE = re.compile(r"^\s*Abilities:\s*(?P<abilities>.*?)\s*$", re.IGNORECASE)

STAT_BLOCK_LINES = 5
MAX_TIER = 255

_EMPTY_TOKENS = {"", "none", "--"}


class ParserState(str, Enum):
    """Position of the cursor relative to the current virus."""

    AWAIT_HEADER = "await_header"
    AWAIT_STATS = "await_stats"
    AWAIT_DESCRIPTION = "await_description"


@dataclass
class _Stats:
    hp: int
    ac: int
    mind: int
    body: int
    spirit: int
    skills: dict[Skill, int]
    abilities: tuple[str, ...] | None
    drops: tuple[Drop, ...]


@dataclass
class VirusParserContext:
    """Cursor and accumulated output of one parse."""

    lines: list[str]
    index: int = 0
    tier: int = 0
    state: ParserState = ParserState.AWAIT_HEADER
    name: str = ""
    element: Element | None = None
    header_index: int = 0
    stats: _Stats | None = None
    viruses: list[Virus] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.index >= len(self.lines)

    @property
    def remaining(self) -> int:
        return len(self.lines) - self.index

    @property
    def line(self) -> str:
        return self.lines[self.index]

    @property
    def line_number(self) -> int:
        """1-based number of the current line among the non-blank lines."""
        return self.index + 1

    def take(self, count: int) -> list[str]:
        taken = self.lines[self.index:self.index + count]
        self.index += count
        return taken

    def reject(self, error: RecordParseError) -> None:
        """Reject the current virus and skip to the next header."""
        logger.debug(f"Rejected virus at line {self.header_index + 1}: {error}")
        self.index = self.header_index + 1
        while not self.done and not is_boundary(self.lines, self.index):
            self.index += 1
        self.rejected.append(
            RejectedRecord(error.message, self.lines[self.header_index:self.index])
        )
        self.state = ParserState.AWAIT_HEADER
        self.stats = None


def parse_tier_header(line: str) -> int | None:
    """Return the tier of a ``CR N`` header, saturated to 255, or None."""
    match = TIER_HEADER_RE.match(line)
    if not match:
        return None
    return min(int(match.group(1)), MAX_TIER)


def is_boundary(lines: list[str], index: int) -> bool:
    """Whether ``lines[index]`` starts a new tier or a new virus.

    Description text may itself end in a parenthesised word, so a
    ``Name (Element)`` line only counts as a virus header when the next
    line opens a stat block, or when it is the last line and names a
    real element.
    """
    line = lines[index]
    if TIER_HEADER_RE.match(line):
        return True
    match = VIRUS_HEADER_RE.match(line)
    if not match:
        return False
    if index + 1 < len(lines):
        return STATS_START_RE.match(lines[index + 1]) is not None
    try:
        Element.parse(match["element"])
    except FieldParseError:
        return False
    return True


def parse_skill_bonuses(line: str) -> dict[Skill, int]:
    """Parse a ``Tech: 2 | Agility: 1`` line. ``None`` yields no skills."""
    if line.strip().lower() in _EMPTY_TOKENS:
        return {}
    bonuses: dict[Skill, int] = {}
    for entry in line.split("|"):
        match = SKILL_ENTRY_RE.match(entry)
        if not match:
            raise RecordParseError(f"malformed skill entry {entry.strip()!r}", line)
        try:
            skill = Skill.parse(match["skill"])
        except FieldParseError as e:
            raise RecordParseError(f"bad skill: {e}", line, e.details) from e
        if skill in bonuses:
            raise RecordParseError(f"duplicate skill {skill.display}", line)
        bonuses[skill] = int(match["bonus"])
    return bonuses


def parse_abilities(line: str) -> tuple[str, ...] | None:
    """Parse an ``Abilities:`` line. ``Abilities: None`` yields None."""
    match = ABILITIES_RE.match(line)
    if not match:
        raise RecordParseError("expected an Abilities line", line)
    text = match["abilities"]
    if text.lower() in _EMPTY_TOKENS:
        return None
    return tuple(ability.strip() for ability in text.split(",") if ability.strip())


def parse_drops(line: str) -> tuple[Drop, ...]:
    """Parse a ``Drops: 1-90: Zenny | 91-100: Airshot`` line."""
    label, sep, rest = line.partition(":")
    if not sep or label.strip().lower() != "drops":
        raise RecordParseError("expected a Drops line", line)
    if rest.strip().lower() in _EMPTY_TOKENS:
        return ()
    drops = []
    for entry in rest.split("|"):
        condition, sep, reward = entry.partition(":")
        if not sep or not condition.strip() or not reward.strip():
            raise RecordParseError(f"malformed drop {entry.strip()!r}", line)
        drops.append(Drop(condition=condition.strip(), reward=reward.strip()))
    return tuple(drops)


def parse_stat_block(lines: list[str]) -> _Stats:
    """Parse the five fixed lines following a virus header."""
    hp_ac = HP_AC_RE.match(lines[0])
    if not hp_ac:
        raise RecordParseError("expected 'HP: n | AC: n'", lines[0])
    scores = SCORES_RE.match(lines[1])
    if not scores:
        raise RecordParseError("expected 'Mind: n | Body: n | Spirit: n'", lines[1])
    return _Stats(
        hp=int(hp_ac["hp"]),
        ac=int(hp_ac["ac"]),
        mind=int(scores["mind"]),
        body=int(scores["body"]),
        spirit=int(scores["spirit"]),
        skills=parse_skill_bonuses(lines[2]),
        abilities=parse_abilities(lines[3]),
        drops=parse_drops(lines[4]),
    )


def _await_header(ctx: VirusParserContext) -> None:
    tier = parse_tier_header(ctx.line)
    if tier is not None:
        if tier < ctx.tier:
            raise TierOrderError(
                f"tier {tier} follows tier {ctx.tier}", ctx.line_number, ctx.line
            )
        ctx.tier = tier
        ctx.index += 1
        return

    ctx.header_index = ctx.index
    match = VIRUS_HEADER_RE.match(ctx.line)
    if not match:
        ctx.reject(RecordParseError("expected a virus header 'Name (Element)'", ctx.line))
        return
    ctx.index += 1
    try:
        ctx.element = Element.parse(match["element"])
    except FieldParseError as e:
        ctx.reject(RecordParseError(f"bad virus element: {e}", ctx.lines[ctx.header_index]))
        return
    ctx.name = match["name"]
    ctx.state = ParserState.AWAIT_STATS


def _await_stats(ctx: VirusParserContext) -> None:
    if ctx.remaining < STAT_BLOCK_LINES:
        raise TruncatedRecordError(
            f"text ends inside the stat block of {ctx.name}",
            ctx.header_index + 1,
            ctx.lines[ctx.header_index],
        )
    try:
        ctx.stats = parse_stat_block(ctx.take(STAT_BLOCK_LINES))
    except RecordParseError as e:
        ctx.reject(e)
        return
    ctx.state = ParserState.AWAIT_DESCRIPTION


def _await_description(ctx: VirusParserContext) -> None:
    description = []
    while not ctx.done and not is_boundary(ctx.lines, ctx.index):
        description.append(ctx.line.strip())
        ctx.index += 1

    stats = ctx.stats
    try:
        virus = Virus(
            name=ctx.name,
            element=ctx.element,
            tier=ctx.tier,
            hp=stats.hp,
            ac=stats.ac,
            mind=stats.mind,
            body=stats.body,
            spirit=stats.spirit,
            skills=stats.skills,
            abilities=stats.abilities,
            drops=stats.drops,
            description="\n".join(description),
        )
    except ValidationError as e:
        ctx.reject(RecordParseError(f"invalid virus: {e.errors()[0]['msg']}", ctx.lines[ctx.header_index]))
        return
    ctx.viruses.append(virus)
    ctx.state = ParserState.AWAIT_HEADER
    ctx.stats = None


_STATE_HANDLERS = {
    ParserState.AWAIT_HEADER: _await_header,
    ParserState.AWAIT_STATS: _await_stats,
    ParserState.AWAIT_DESCRIPTION: _await_description,
}


def parse_virus_lines(lines: list[str]) -> tuple[list[Virus], list[RejectedRecord]]:
    """Parse the non-blank lines of a virus compendium.

    Returns:
        The viruses in source order and the rejected virus blocks

    Raises:
        MissingTierHeaderError: If the first line is not a ``CR N`` header
        TierOrderError: If a tier header is lower than the one before it
        TruncatedRecordError: If the text ends inside a stat block
    """
    if not lines or parse_tier_header(lines[0]) is None:
        first = lines[0] if lines else None
        raise MissingTierHeaderError("virus text must start with a 'CR N' header", 1, first)

    ctx = VirusParserContext(lines=lines)
    while not ctx.done:
        _STATE_HANDLERS[ctx.state](ctx)

    # A header with a complete stat block and no description ends the text
    if ctx.state is ParserState.AWAIT_DESCRIPTION:
        _await_description(ctx)
    elif ctx.state is ParserState.AWAIT_STATS:
        raise TruncatedRecordError(
            f"text ends inside the stat block of {ctx.name}",
            ctx.header_index + 1,
            ctx.lines[ctx.header_index],
        )
    return ctx.viruses, ctx.rejected


__all__ = [
    "ParserState",
    "VirusParserContext",
    "TIER_HEADER_RE",
    "VIRUS_HEADER_RE",
    "STATS_START_RE",
    "parse_tier_header",
    "is_boundary",
    "parse_skill_bonuses",
    "parse_abilities",
    "parse_drops",
    "parse_stat_block",
    "parse_virus_lines",
]
