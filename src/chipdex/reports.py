"""
Load and reload reports.

A load either raises (the catalog keeps its previous contents) or returns
a LoadReport. A report with rejected records is a successful load with
warnings; an empty ``rejected`` list is a clean load.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .fields import RecordKind


@dataclass
class RejectedRecord:
    """A single record that failed to parse and was skipped."""
    reason: str
    lines: list[str] = field(default_factory=list)

    @property
    def first_line(self) -> str:
        return self.lines[0] if self.lines else ""


@dataclass
class LoadReport:
    """Outcome of loading one catalog."""
    kind: RecordKind
    loaded: int = 0
    rejected: list[RejectedRecord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every record parsed."""
        return not self.rejected

    @property
    def warnings(self) -> int:
        return len(self.rejected)

    def summary(self) -> str:
        """One-paragraph description for logs and chat replies."""
        text = f"{self.loaded} {self.kind.label} records loaded"
        if not self.rejected:
            return text
        bad = "\n".join(record.first_line for record in self.rejected)
        return f"{text}, {len(self.rejected)} rejected:\n{bad}"


@dataclass
class ReloadReport:
    """Outcome of reloading every catalog of a library.

    ``reports`` holds the kinds that loaded; ``errors`` maps the kinds whose
    load was rejected to the error message. Rejected kinds keep their
    previous contents.
    """
    reports: dict[RecordKind, LoadReport] = field(default_factory=dict)
    errors: dict[RecordKind, str] = field(default_factory=dict)
    unified_count: int = 0
    unified_error: str | None = None

    @property
    def ok(self) -> bool:
        if self.errors or self.unified_error:
            return False
        return all(r.ok for r in self.reports.values())

    def summary(self) -> str:
        lines = [self.reports[kind].summary() for kind in RecordKind if kind in self.reports]
        lines.extend(
            f"{kind.label} load failed: {self.errors[kind]}"
            for kind in RecordKind
            if kind in self.errors
        )
        if self.unified_error:
            lines.append(f"Full library not rebuilt: {self.unified_error}")
        lines.append(f"{self.unified_count} entries in the full library")
        return "\n".join(lines)


__all__ = ["RejectedRecord", "LoadReport", "ReloadReport"]
