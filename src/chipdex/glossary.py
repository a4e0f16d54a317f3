"""
Glossary of rules text for blights, statuses and panels.

The glossary is a YAML file with three top-level mappings::

    blights:
      fire: The target takes 1d6 fire damage at the start of its turn.
    statuses:
      paralyzed: The target cannot move or act.
    panels:
      cracked: The panel breaks when stepped off.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .models import BattleChip

logger = logging.getLogger("chipdex")

SECTIONS = ("blights", "statuses", "panels")


class Glossary:
    """Case-insensitive lookup of glossary entries by section."""

    def __init__(self, entries: dict[str, dict[str, str]] | None = None) -> None:
        self._entries: dict[str, dict[str, str]] = {section: {} for section in SECTIONS}
        for section, values in (entries or {}).items():
            self._set_section(section, values)

    def _set_section(self, section: str, values: dict) -> None:
        if section not in SECTIONS:
            raise ValueError(f"Unknown glossary section '{section}'")
        if not isinstance(values, dict):
            raise ValueError(f"Glossary section '{section}' must be a mapping")
        self._entries[section] = {str(key).lower(): str(text) for key, text in values.items()}

    @classmethod
    def load_yaml(cls, path: Path) -> Glossary:
        """Load a glossary file.

        Args:
            path: Path to the YAML file

        Raises:
            FileNotFoundError: If the file doesn't exist
            yaml.YAMLError: If the YAML is malformed
            ValueError: If a section is unknown or is not a mapping
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("Glossary file must contain a mapping")

        glossary = cls(data)
        logger.info(f"📖 Loaded glossary from {path} ({len(glossary)} entries)")
        return glossary

    def get(self, section: str, key: str) -> str | None:
        """Return the text of ``key`` in ``section``, or None."""
        return self._entries.get(section.lower(), {}).get(key.strip().lower())

    def blight_for(self, chip: BattleChip) -> str | None:
        """Blight text for the chip's affliction element, if it has one."""
        if chip.affliction is None:
            return None
        return self.get("blights", chip.affliction.value)

    def keys(self, section: str) -> list[str]:
        """Sorted lowercase keys of a section."""
        return sorted(self._entries.get(section.lower(), {}))

    def __len__(self) -> int:
        return sum(len(values) for values in self._entries.values())


__all__ = ["Glossary", "SECTIONS"]
