"""
Name-keyed catalog shared by the chip, NCP and virus catalogs.

A load parses the whole text into a new dict off to the side and swaps it
in under the lock, so readers see either the old contents or the new ones
and never a partial load. A rejected load leaves the old dict in place.
"""

from __future__ import annotations

import json
import logging
import unicodedata
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from threading import RLock
from typing import Callable, ClassVar, Generic, Iterable, TypeVar

from rapidfuzz.distance import JaroWinkler

from ..errors import DuplicateKeyError, TooManyBadRecordsError
from ..fields import RecordKind, TokenEnum
from ..models import Record
from ..reports import LoadReport, RejectedRecord
from ..text import split_lines

logger = logging.getLogger("chipdex")

R = TypeVar("R", bound=Record)
E = TypeVar("E", bound=TokenEnum)

DEFAULT_LIMIT = 5
DEFAULT_MAX_BAD_RECORDS = 5


class DuplicatePolicy(str, Enum):
    """What a load does with a second record under an existing name."""

    REJECT = "reject"  # the later record is rejected
    REPLACE = "replace"  # the later record wins
    FAIL = "fail"  # the whole load fails


def normalize_key(name: str) -> str:
    """Key a user-typed name the way record names are keyed."""
    return unicodedata.normalize("NFC", name.strip()).lower()


def coerce_token(enum_cls: type[E], value: E | str) -> E:
    """Accept either a variant or a token to parse into one.

    Raises:
        FieldParseError: If ``value`` is a string naming no variant
    """
    if isinstance(value, enum_cls):
        return value
    return enum_cls.parse(value.strip())


def prefix_match(entries: Iterable[tuple[str, str]], query: str, limit: int) -> list[str] | None:
    """Names of the first ``limit`` (key, name) entries keyed under ``query``, sorted."""
    prefix = normalize_key(query)
    names = [name for key, name in entries if key.startswith(prefix)]
    names = names[:max(limit, 0)]
    if not names:
        return None
    return sorted(names, key=str.lower)


def fuzzy_rank(entries: Iterable[tuple[str, str]], query: str, limit: int) -> list[str]:
    """Names of the ``limit`` (key, name) entries whose keys best match ``query``."""
    if limit <= 0:
        return []
    target = normalize_key(query)
    scored = [(JaroWinkler.similarity(target, key), name) for key, name in entries]
    scored.sort(key=lambda item: (-item[0], item[1].lower()))
    return [name for _, name in scored[:limit]]


class Catalog(ABC, Generic[R]):
    """In-memory catalog of one record kind.

    Thread-safe: loads swap the whole contents under a lock and every read
    works on a snapshot of the contents taken under the same lock.

    Args:
        max_bad_records: Number of rejected records a load tolerates
    """

    kind: ClassVar[RecordKind]
    duplicate_policy: ClassVar[DuplicatePolicy] = DuplicatePolicy.REJECT

    def __init__(self, max_bad_records: int = DEFAULT_MAX_BAD_RECORDS):
        self.max_bad_records = max_bad_records
        self._records: dict[str, R] = {}
        self._lock = RLock()

    # =========================================================================
    # Loading
    # =========================================================================

    @abstractmethod
    def parse(self, lines: list[str]) -> tuple[list[R], list[RejectedRecord]]:
        """Parse non-blank source lines into records and rejected records."""

    def load(self, text: str) -> LoadReport:
        """Replace the catalog contents with the records parsed from ``text``.

        Args:
            text: Raw source document

        Returns:
            Report of the load; rejected records are warnings

        Raises:
            TooManyBadRecordsError: If more records were rejected than
                ``max_bad_records``
            StructuralError: If the text is unusable as a whole
        """
        records, rejected = self.parse(split_lines(text))
        built = self._build(records, rejected)
        report = LoadReport(kind=self.kind, loaded=len(built), rejected=rejected)

        if len(rejected) > self.max_bad_records:
            logger.warning(
                f"Rejected {self.kind.label} load: {len(rejected)} bad records "
                f"(limit {self.max_bad_records})"
            )
            raise TooManyBadRecordsError(
                f"{len(rejected)} {self.kind.label} records could not be parsed",
                report,
            )

        with self._lock:
            self._records = built

        for record in rejected:
            logger.warning(f"Skipped {self.kind.label}: {record.reason}: {record.first_line!r}")
        logger.info(f"Loaded {len(built)} {self.kind.label} records")
        return report

    def _build(self, records: list[R], rejected: list[RejectedRecord]) -> dict[str, R]:
        built: dict[str, R] = {}
        for record in records:
            existing = built.get(record.key)
            if existing is None:
                built[record.key] = record
            elif self.duplicate_policy is DuplicatePolicy.FAIL:
                raise DuplicateKeyError(record.name, self.kind.value)
            elif self.duplicate_policy is DuplicatePolicy.REPLACE:
                logger.warning(f"Duplicate {self.kind.label} {record.name!r}, keeping the later one")
                built[record.key] = record
            else:
                rejected.append(
                    RejectedRecord(f"duplicate {self.kind.label} name {record.name!r}", record.render().split("\n"))
                )
        return built

    def _snapshot(self) -> dict[str, R]:
        with self._lock:
            return self._records

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, name: str) -> R | None:
        """Look up a record by case-insensitive name."""
        return self._snapshot().get(normalize_key(name))

    def prefix_search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[str] | None:
        """Names starting with ``query``.

        The first ``limit`` matches in load order are returned sorted by
        name. An empty query matches every record.

        Returns:
            Sorted names, or None when nothing matches
        """
        entries = ((key, record.name) for key, record in self._snapshot().items())
        return prefix_match(entries, query, limit)

    def fuzzy_search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[str]:
        """The ``limit`` names most similar to ``query`` (Jaro-Winkler).

        Never fails; an empty catalog gives an empty list. Equal scores are
        ordered by name.
        """
        entries = ((key, record.name) for key, record in self._snapshot().items())
        return fuzzy_rank(entries, query, limit)

    def filter(self, predicate: Callable[[R], bool]) -> list[str] | None:
        """Sorted names of the records matching ``predicate``, or None."""
        names = [record.name for record in self._snapshot().values() if predicate(record)]
        if not names:
            return None
        return sorted(names, key=str.lower)

    def names(self) -> list[str]:
        """Every name, sorted."""
        return sorted((record.name for record in self._snapshot().values()), key=str.lower)

    def records(self) -> list[R]:
        """Every record, sorted by name."""
        return sorted(self._snapshot().values())

    def records_in_load_order(self) -> list[R]:
        """Every record in the order the last load produced them."""
        return list(self._snapshot().values())

    def export_json(self, path: Path) -> None:
        """Write every record, sorted by name, to ``path`` as JSON."""
        data = [record.model_dump(mode="json") for record in self.records()]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug(f"Exported {len(data)} {self.kind.label} records to {path}")

    def __len__(self) -> int:
        return len(self._snapshot())

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return normalize_key(name) in self._snapshot()

    def __iter__(self):
        return iter(self.records())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} records)"


__all__ = [
    "Catalog",
    "DuplicatePolicy",
    "coerce_token",
    "normalize_key",
    "prefix_match",
    "fuzzy_rank",
    "DEFAULT_LIMIT",
    "DEFAULT_MAX_BAD_RECORDS",
]
