"""
Unified catalog: every chip, NCP and virus under one name space.

Entries are added chips first, then NCPs, then viruses. When a name is
already taken by another kind the newcomer gets its kind suffix, so a
virus sharing a chip's name becomes ``<name>_v``. Two records of the same
kind under one name are a duplicate key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock

from ..errors import DuplicateKeyError
from ..fields import RecordKind
from ..models import Record
from .base import DEFAULT_LIMIT, Catalog, fuzzy_rank, normalize_key, prefix_match

logger = logging.getLogger("chipdex")


@dataclass(frozen=True)
class CatalogEntry:
    """A record tagged with its kind and its name in the unified catalog."""
    kind: RecordKind
    record: Record
    name: str

    @property
    def key(self) -> str:
        """Lookup key: the lowercased unified name."""
        return self.name.lower()

    def render(self) -> str:
        return self.record.render()


class UnifiedCatalog:
    """Read-mostly merged view over the three catalogs.

    ``rebuild`` builds a fresh name map and swaps it in under the lock;
    readers never observe a half-built map.
    """

    def __init__(self):
        self._entries: dict[str, CatalogEntry] = {}
        self._lock = RLock()

    @staticmethod
    def build(*catalogs: Catalog) -> dict[str, CatalogEntry]:
        """Merge catalogs, in the order given, into a new name map.

        Raises:
            DuplicateKeyError: If two records of one kind share a name, or
                a suffixed name is itself taken
        """
        entries: dict[str, CatalogEntry] = {}
        for catalog in catalogs:
            for record in catalog.records_in_load_order():
                _add_entry(entries, record)
        return entries

    def rebuild(self, *catalogs: Catalog) -> int:
        """Replace the contents with the merge of ``catalogs``.

        Returns:
            Number of entries in the new map
        """
        entries = self.build(*catalogs)
        with self._lock:
            self._entries = entries
        logger.info(f"Unified catalog rebuilt with {len(entries)} entries")
        return len(entries)

    def _snapshot(self) -> dict[str, CatalogEntry]:
        with self._lock:
            return self._entries

    def get(self, name: str) -> CatalogEntry | None:
        """Entry stored under ``name`` (suffixed names included), or None."""
        return self._snapshot().get(normalize_key(name))

    def prefix_search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[str] | None:
        """Unified names starting with ``query``.

        Args:
            query: Case-insensitive prefix; "" matches every entry
            limit: Most names to return, taken in insertion order

        Returns:
            The matching names sorted, or None when nothing matches
        """
        entries = ((key, entry.name) for key, entry in self._snapshot().items())
        return prefix_match(entries, query, limit)

    def fuzzy_search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[str]:
        """Up to ``limit`` names ranked by Jaro-Winkler similarity to ``query``.

        Returns:
            Names, best first, ties by name; empty only for an empty catalog
            or a limit below 1
        """
        entries = ((key, entry.name) for key, entry in self._snapshot().items())
        return fuzzy_rank(entries, query, limit)

    def names(self) -> list[str]:
        """Every unified name, sorted."""
        return sorted((entry.name for entry in self._snapshot().values()), key=str.lower)

    def entries(self) -> list[CatalogEntry]:
        """Every entry in insertion order: chips, NCPs, then viruses."""
        return list(self._snapshot().values())

    def __len__(self) -> int:
        return len(self._snapshot())

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return normalize_key(name) in self._snapshot()

    def __repr__(self) -> str:
        return f"UnifiedCatalog({len(self)} entries)"


def _add_entry(entries: dict[str, CatalogEntry], record: Record) -> None:
    existing = entries.get(record.key)
    if existing is None:
        entries[record.key] = CatalogEntry(record.kind, record, record.name)
        return
    if existing.kind is record.kind:
        raise DuplicateKeyError(record.name, record.kind.value)

    name = f"{record.name}{record.kind.collision_suffix}"
    if name.lower() in entries:
        raise DuplicateKeyError(name, record.kind.value)
    logger.debug(f"{record.kind.label} {record.name!r} collides with a {existing.kind.label}, renamed {name!r}")
    entries[name.lower()] = CatalogEntry(record.kind, record, name)


__all__ = ["CatalogEntry", "UnifiedCatalog"]
