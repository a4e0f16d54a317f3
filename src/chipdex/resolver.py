"""
Lookup resolution of free-text queries.

A query resolves in at most three steps: an exact name match, then a
prefix search, then a fuzzy search. A step that yields exactly one name
resolves the query; more than one name is an ambiguity the caller
presents for selection by number.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from .catalog.base import DEFAULT_LIMIT, Catalog
from .catalog.unified import CatalogEntry, UnifiedCatalog
from .fields import RecordKind
from .models import Record

logger = logging.getLogger("chipdex")


@dataclass
class Resolved:
    """The query named exactly one record."""
    name: str
    kind: RecordKind
    record: Record
    rendered: str


@dataclass
class Candidate:
    """One entry of a disambiguation list."""
    name: str
    kind: RecordKind | None = None

    @property
    def label(self) -> str:
        """Name, followed by the kind label when the candidate has one."""
        if self.kind is None:
            return self.name
        return f"{self.name} ({self.kind.label})"


@dataclass
class Ambiguous:
    """The query matched several names; ``candidates`` keep search order."""
    query: str
    candidates: list[Candidate] = field(default_factory=list)

    def numbered(self) -> list[str]:
        """Candidate labels prefixed with their 1-based selection number."""
        return [f"{i}. {candidate.label}" for i, candidate in enumerate(self.candidates, start=1)]


@dataclass
class NotFound:
    """Nothing matched (only possible on an empty catalog)."""
    query: str


LookupResult = Union[Resolved, Ambiguous, NotFound]


class LookupResolver:
    """Resolve queries against one catalog or the unified catalog.

    Args:
        catalog: A single-kind catalog or the unified catalog
    """

    def __init__(self, catalog: Catalog | UnifiedCatalog):
        self.catalog = catalog
        self.tags_kinds = isinstance(catalog, UnifiedCatalog)

    def resolve(self, query: str, limit: int = DEFAULT_LIMIT) -> LookupResult:
        """Resolve ``query`` to a record or a list of candidates.

        Args:
            query: Name or partial name
            limit: Most candidates to return; values below 1 count as 1

        Returns:
            Resolved, Ambiguous, or NotFound when the catalog is empty
        """
        limit = max(limit, 1)
        hit = self.catalog.get(query)
        if hit is not None:
            return self._resolved(hit)

        names = self.catalog.prefix_search(query, limit)
        if not names:
            names = self.catalog.fuzzy_search(query, limit)
        names = list(dict.fromkeys(names))

        if not names:
            logger.debug(f"No match for {query!r}")
            return NotFound(query)
        if len(names) == 1:
            hit = self.catalog.get(names[0])
            if hit is not None:
                return self._resolved(hit)

        return Ambiguous(query, [self._candidate(name) for name in names])

    def select(self, ambiguous: Ambiguous, choice: str | int) -> Resolved | None:
        """Pick a candidate by its 1-based number.

        Returns:
            The chosen record, or None for a non-numeric or out-of-range
            choice, or a candidate no longer in the catalog
        """
        try:
            index = int(choice)
        except (TypeError, ValueError):
            return None
        if not 1 <= index <= len(ambiguous.candidates):
            return None
        hit = self.catalog.get(ambiguous.candidates[index - 1].name)
        if hit is None:
            return None
        return self._resolved(hit)

    def _resolved(self, hit: Record | CatalogEntry) -> Resolved:
        if isinstance(hit, CatalogEntry):
            return Resolved(hit.name, hit.kind, hit.record, hit.render())
        return Resolved(hit.name, hit.kind, hit, hit.render())

    def _candidate(self, name: str) -> Candidate:
        if not self.tags_kinds:
            return Candidate(name)
        entry = self.catalog.get(name)
        return Candidate(name, entry.kind if entry is not None else None)


__all__ = [
    "Resolved",
    "Candidate",
    "Ambiguous",
    "NotFound",
    "LookupResult",
    "LookupResolver",
]
