"""NCP catalog."""

from __future__ import annotations

from ..fields import NCPColor, RecordKind
from ..models import NCP
from ..parsers.ncps import parse_ncp_lines
from ..reports import RejectedRecord
from .base import Catalog, DuplicatePolicy, coerce_token


class NCPCatalog(Catalog[NCP]):
    """Catalog of Navi Customizer programs.

    Non-program lines are skipped rather than rejected, so NCP loads never
    produce warnings. A repeated name keeps the later program.
    """

    kind = RecordKind.NCP
    duplicate_policy = DuplicatePolicy.REPLACE

    def parse(self, lines: list[str]) -> tuple[list[NCP], list[RejectedRecord]]:
        return parse_ncp_lines(lines), []

    def by_color(self, color: NCPColor | str) -> list[str] | None:
        """Programs of one palette colour.

        Raises:
            FieldParseError: If ``color`` is a string naming no colour
        """
        color = coerce_token(NCPColor, color)
        return self.filter(lambda program: program.color is color)

    def by_max_cost(self, cost: int) -> list[str] | None:
        """Programs costing at most ``cost`` EB."""
        return self.filter(lambda program: program.cost <= cost)


__all__ = ["NCPCatalog"]
