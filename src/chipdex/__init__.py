"""
chipdex - lookup engine for BattleChips, NCPs and viruses.

This package provides:
- Parsers turning the plain-text chip, NCP and virus documents into records
- Per-kind catalogs with exact, prefix and fuzzy search plus filters
- A unified catalog merging every kind under one name space
- A lookup resolver producing a record or a disambiguation list
- A Library tying fetching, loading, export and the glossary together
"""

from .catalog import (
    CatalogEntry,
    ChipCatalog,
    NCPCatalog,
    UnifiedCatalog,
    VirusCatalog,
)
from .config import Settings
from .dice import DiceRoll, roll_dice, roll_stats
from .errors import (
    ChipdexError,
    DiceError,
    DuplicateKeyError,
    FieldParseError,
    LoadError,
    MissingTierHeaderError,
    RecordParseError,
    SourceError,
    StructuralError,
    TierOrderError,
    TooManyBadRecordsError,
    TruncatedRecordError,
)
from .fields import ChipCategory, Element, NCPColor, Range, RecordKind, Skill, SkillGroup
from .glossary import Glossary
from .library import Library
from .models import NCP, BattleChip, Drop, Virus
from .reports import LoadReport, RejectedRecord, ReloadReport
from .resolver import Ambiguous, Candidate, LookupResolver, NotFound, Resolved

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("chipdex")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable

__all__ = [
    # Records and fields
    "BattleChip",
    "NCP",
    "Drop",
    "Virus",
    "Element",
    "Skill",
    "SkillGroup",
    "Range",
    "ChipCategory",
    "NCPColor",
    "RecordKind",
    # Catalogs
    "ChipCatalog",
    "NCPCatalog",
    "VirusCatalog",
    "UnifiedCatalog",
    "CatalogEntry",
    # Lookup
    "LookupResolver",
    "Resolved",
    "Ambiguous",
    "Candidate",
    "NotFound",
    # Library
    "Library",
    "Settings",
    "Glossary",
    "LoadReport",
    "ReloadReport",
    "RejectedRecord",
    # Dice
    "DiceRoll",
    "roll_dice",
    "roll_stats",
    # Errors
    "ChipdexError",
    "FieldParseError",
    "RecordParseError",
    "LoadError",
    "TooManyBadRecordsError",
    "StructuralError",
    "MissingTierHeaderError",
    "TruncatedRecordError",
    "TierOrderError",
    "DuplicateKeyError",
    "DiceError",
    "SourceError",
]
