"""BattleChip catalog and its filters."""

from __future__ import annotations

from ..fields import Element, RecordKind, Skill
from ..models import BattleChip
from ..parsers.chips import parse_chip_lines
from ..reports import RejectedRecord
from .base import Catalog, DuplicatePolicy, coerce_token


class ChipCatalog(Catalog[BattleChip]):
    """Catalog of battlechips.

    Loads are tolerant: rejected chip pairs (including repeated names) are
    reported and skipped, up to ``max_bad_records``.
    """

    kind = RecordKind.CHIP
    duplicate_policy = DuplicatePolicy.REJECT

    def parse(self, lines: list[str]) -> tuple[list[BattleChip], list[RejectedRecord]]:
        return parse_chip_lines(lines)

    def by_element(self, element: Element | str) -> list[str] | None:
        """Chips with ``element`` among their elements.

        Args:
            element: An Element or its name, matched case-insensitively

        Returns:
            Sorted chip names, or None when no chip matches

        Raises:
            FieldParseError: If ``element`` is a string naming no element
        """
        element = coerce_token(Element, element)
        return self.filter(lambda chip: element in chip.elements)

    def by_skill(self, skill: Skill | str) -> list[str] | None:
        """Chips listing ``skill``; ``Varies`` means chips with several skills."""
        skill = coerce_token(Skill, skill)
        if skill is Skill.VARIES:
            return self.filter(lambda chip: len(chip.skills) > 1)
        return self.filter(lambda chip: skill in chip.skills)

    def by_skill_target(self, skill: Skill | str) -> list[str] | None:
        """Chips whose save is checked with ``skill``."""
        skill = coerce_token(Skill, skill)
        return self.filter(lambda chip: chip.skill_target is skill)

    def by_skill_user(self, skill: Skill | str) -> list[str] | None:
        """Chips whose save DC is set by ``skill``."""
        skill = coerce_token(Skill, skill)
        return self.filter(lambda chip: chip.skill_user is skill)

    def by_skill_check(self, skill: Skill | str) -> list[str] | None:
        """Chips naming ``skill`` on either side of their save."""
        skill = coerce_token(Skill, skill)
        return self.filter(lambda chip: skill in chip.save_skills)

    def by_affliction(self, element: Element | str) -> list[str] | None:
        """Chips whose description inflicts a blight of ``element``."""
        element = coerce_token(Element, element)
        return self.filter(lambda chip: chip.affliction is element)


__all__ = ["ChipCatalog"]
