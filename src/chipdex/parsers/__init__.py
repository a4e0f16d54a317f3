"""
Record parsers turning source lines into chips, NCPs and viruses.

Parsers are pure: they take the non-blank source lines and return records
plus the rejected ones. Load policy (thresholds, duplicates) belongs to
the catalogs.
"""

from .chips import parse_chip, parse_chip_lines
from .ncps import parse_ncp_lines
from .viruses import ParserState, parse_virus_lines

__all__ = [
    "parse_chip",
    "parse_chip_lines",
    "parse_ncp_lines",
    "ParserState",
    "parse_virus_lines",
]
