"""Virus catalog: tier queries, random encounters and virus families."""

from __future__ import annotations

import random

from ..fields import Element, RecordKind
from ..models import Virus
from ..parsers.viruses import parse_virus_lines
from ..reports import RejectedRecord
from .base import Catalog, DuplicatePolicy, coerce_token, normalize_key


class VirusCatalog(Catalog[Virus]):
    """Catalog of viruses.

    Isolated bad virus blocks are skipped up to ``max_bad_records``; a
    repeated name or any structural error rejects the whole load.
    """

    kind = RecordKind.VIRUS
    duplicate_policy = DuplicatePolicy.FAIL

    def parse(self, lines: list[str]) -> tuple[list[Virus], list[RejectedRecord]]:
        return parse_virus_lines(lines)

    @property
    def highest_tier(self) -> int:
        """Highest tier loaded, 0 when empty."""
        return max((virus.tier for virus in self._snapshot().values()), default=0)

    def by_element(self, element: Element | str) -> list[str] | None:
        """Viruses of ``element``, sorted by name, or None."""
        element = coerce_token(Element, element)
        return self.filter(lambda virus: virus.element is element)

    def by_tier(self, tier: int) -> list[str] | None:
        """Viruses of one tier.

        Returns:
            Sorted names, or None when no virus has that tier or the tier is
            above the highest loaded one
        """
        if tier > self.highest_tier:
            return None
        return self.filter(lambda virus: virus.tier == tier)

    def by_tier_range(self, low: int, high: int) -> list[str] | None:
        """Viruses with ``low <= tier <= high``; bounds may come in either order."""
        low, high = min(low, high), max(low, high)
        return self.filter(lambda virus: low <= virus.tier <= high)

    def random_encounter(
        self,
        low: int,
        high: int,
        count: int,
        rng: random.Random | None = None,
    ) -> list[str] | None:
        """Draw ``count`` virus names, with replacement, from a tier range.

        Returns:
            The drawn names in draw order, or None when the range holds no
            viruses or ``count`` is below 1
        """
        if count < 1:
            return None
        pool = self.by_tier_range(low, high)
        if not pool:
            return None
        rng = rng or random.Random()
        return [rng.choice(pool) for _ in range(count)]

    def family(self, name: str) -> list[str] | None:
        """Every virus whose name starts with ``name``, by tier then element.

        Families follow the "Mettaur, Mettaur2, Mettaur3, MettaurEX" naming
        scheme, so ``name`` must itself be a loaded virus.
        """
        if self.get(name) is None:
            return None
        prefix = normalize_key(name)
        members = [virus for key, virus in self._snapshot().items() if key.startswith(prefix)]
        members.sort(key=lambda virus: (virus.tier, virus.element.order, virus.key))
        return [virus.name for virus in members]


__all__ = ["VirusCatalog"]
