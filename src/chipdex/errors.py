"""
Exception hierarchy for chipdex.

Parsing, loading and lookup failures are classified so that callers can
tell a bad token from a rejected record, a tolerated partial load from a
rejected one, and a structural failure of the source text from all of them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .reports import LoadReport


class ChipdexError(Exception):
    """Base exception for all chipdex errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FieldParseError(ChipdexError, ValueError):
    """An enumerated field token was not recognised.

    Attributes:
        field: Name of the enumeration (e.g. "element", "skill")
        token: The token that failed to parse
    """

    def __init__(self, field: str, token: str):
        super().__init__(
            f"could not parse {field} from {token!r}",
            details={"field": field, "token": token},
        )
        self.field = field
        self.token = token


class RecordParseError(ChipdexError):
    """A record could not be built from its source lines.

    Raised for grammar mismatches and for field errors propagated out of a
    record's fields. Only the one record is rejected.

    Attributes:
        lines: The offending source line(s)
    """

    def __init__(
        self,
        message: str,
        lines: list[str] | tuple[str, ...] | str = (),
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        if isinstance(lines, str):
            lines = [lines]
        self.lines = list(lines)

    def __str__(self) -> str:
        if not self.lines:
            return self.message
        return f"{self.message}: {self.lines[0]!r}"


class LoadError(ChipdexError):
    """A catalog load was rejected; the previous contents are kept.

    Attributes:
        report: The load report describing what was rejected
    """

    def __init__(self, message: str, report: LoadReport | None = None):
        super().__init__(message)
        self.report = report


class TooManyBadRecordsError(LoadError):
    """A tolerant load rejected more records than its threshold allows."""


class StructuralError(ChipdexError):
    """The source text is unusable as a whole.

    Unlike :class:`RecordParseError`, a structural error is never tolerated:
    the whole load is aborted.

    Attributes:
        line_number: 1-based index into the non-blank source lines, if known
    """

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        details: dict[str, Any] = {}
        if line_number is not None:
            details["line_number"] = line_number
        if line is not None:
            details["line"] = line
        super().__init__(message, details)
        self.line_number = line_number
        self.line = line


class MissingTierHeaderError(StructuralError):
    """The virus text does not open with a tier header."""


class TruncatedRecordError(StructuralError):
    """The source text ended in the middle of a stat block."""


class TierOrderError(StructuralError):
    """A tier header went backwards."""


class DuplicateKeyError(StructuralError):
    """Two records of the same kind share a name."""

    def __init__(self, name: str, kind: str):
        super().__init__(f"duplicate {kind} name: {name}")
        self.details["name"] = name
        self.details["kind"] = kind
        self.name = name
        self.kind = kind


class DiceError(ChipdexError, ValueError):
    """A dice expression could not be evaluated."""


class SourceError(ChipdexError):
    """A source document could not be fetched."""


__all__ = [
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
