"""Catalogs of parsed records and the unified cross-kind catalog."""

from .base import Catalog, DuplicatePolicy
from .chips import ChipCatalog
from .programs import NCPCatalog
from .unified import CatalogEntry, UnifiedCatalog
from .viruses import VirusCatalog

__all__ = [
    "Catalog",
    "DuplicatePolicy",
    "ChipCatalog",
    "NCPCatalog",
    "VirusCatalog",
    "CatalogEntry",
    "UnifiedCatalog",
]
