"""
Dice rolling for chip damage and character creation.

Expressions are ``+``-joined terms, each an integer or ``NdM``; for
example ``2d6 + 1d4 + 3``. Chip damage strings such as ``1d10`` are valid
expressions.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field

from .errors import DiceError

DICE_TERM_RE = re.compile(r"^(?P<count>\d*)\s*d\s*(?P<faces>\d+)$", re.IGNORECASE)

DEFAULT_FACES = 6
MAX_DICE = 1000


@dataclass
class DiceRoll:
    """Total of an expression and every individual die or constant."""
    total: int
    rolls: list[int] = field(default_factory=list)


def _roll_die(faces: int, reroll: bool, rng: random.Random) -> int:
    value = rng.randint(1, faces)
    if reroll and value == 1:
        value = max(value, rng.randint(1, faces))
    return value


def roll_dice(expression: str, reroll: bool = False, rng: random.Random | None = None) -> DiceRoll:
    """Roll a dice expression.

    Args:
        expression: ``+``-joined integers and ``NdM`` terms; N defaults to
            1 and M of 0 or 1 rolls a d6
        reroll: Roll each 1 once more, keeping the higher result
        rng: Random source; a fresh one when omitted

    Raises:
        DiceError: If a term is neither an integer nor a dice term, or the
            expression rolls more than ``MAX_DICE`` dice
    """
    rng = rng or random.Random()
    rolls: list[int] = []
    dice_rolled = 0

    for term in expression.split("+"):
        term = term.strip()
        if term.isdigit():
            rolls.append(int(term))
            continue

        match = DICE_TERM_RE.match(term)
        if not match:
            raise DiceError(f"Cannot roll {term!r}", {"expression": expression, "term": term})
        count = int(match["count"]) if match["count"] else 1
        faces = int(match["faces"])
        if faces <= 1:
            faces = DEFAULT_FACES

        dice_rolled += count
        if dice_rolled > MAX_DICE:
            raise DiceError(f"Too many dice in {expression!r} (max {MAX_DICE})", {"expression": expression})
        rolls.extend(_roll_die(faces, reroll, rng) for _ in range(count))

    return DiceRoll(total=sum(rolls), rolls=rolls)


def roll_stats(rng: random.Random | None = None) -> list[int]:
    """Roll six ability scores, each 4d6 dropping the lowest die."""
    rng = rng or random.Random()
    stats = []
    for _ in range(6):
        rolls = sorted(roll_dice("4d6", rng=rng).rolls)
        stats.append(sum(rolls[1:]))
    return stats


__all__ = ["DiceRoll", "roll_dice", "roll_stats", "DICE_TERM_RE", "MAX_DICE"]
