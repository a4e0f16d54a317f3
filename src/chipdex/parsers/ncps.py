"""
NCP parser.

The NCP document is a flat list. A line that names a palette colour starts
a new colour section; every other line is matched as::

    Undershirt (1 EB) - Reduces incoming damage by 1

Lines that match neither are skipped without error.
"""

from __future__ import annotations

import logging
import re

from ..fields import NCPColor
from ..models import NCP

logger = logging.getLogger("chipdex")

NCP_LINE_RE = re.compile(r"^\s*(?P<name>.+?)\s*\((?P<cost>\S+)\s+EB\)\s*-\s*(?P<description>.+?)\s*$")


def parse_cost(token: str) -> int:
    """Parse an EB cost, saturating to ``NCP.MAX_COST`` on overflow or garbage."""
    try:
        cost = int(token)
    except ValueError:
        return NCP.MAX_COST
    if cost < 0 or cost > NCP.MAX_COST:
        return NCP.MAX_COST
    return cost


def parse_ncp_lines(lines: list[str]) -> list[NCP]:
    """Parse NCP lines in source order, tracking the current colour section."""
    color: NCPColor | None = None
    programs: list[NCP] = []
    for line in lines:
        if NCPColor.is_header(line):
            color = NCPColor.parse(line.strip())
            continue
        match = NCP_LINE_RE.match(line)
        if not match:
            logger.debug(f"Skipping non-NCP line: {line!r}")
            continue
        programs.append(
            NCP(
                name=match["name"],
                cost=parse_cost(match["cost"]),
                color=color,
                description=match["description"],
                raw=line,
            )
        )
    return programs


__all__ = ["NCP_LINE_RE", "parse_cost", "parse_ncp_lines"]
