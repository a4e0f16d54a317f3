"""
Runtime settings read from the environment.

Values come from ``CHIPDEX_*`` environment variables, after loading a
``.env`` file from the working directory when one exists.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .fields import RecordKind

logger = logging.getLogger("chipdex")

ENV_PREFIX = "CHIPDEX_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Where to fetch source documents and how tolerant loads are."""

    chip_url: str | None = Field(default=None, description="Plain-text export of the chip list")
    ncp_url: str | None = Field(default=None, description="Plain-text export of the NCP list")
    virus_url: str | None = Field(default=None, description="Plain-text export of the virus compendium")
    custom_chips: Path | None = Field(
        default=None, description="Local file of extra chip line pairs"
    )
    load_custom_chips: bool = Field(
        default=False, description="Append custom_chips to the downloaded chip text"
    )
    export_dir: Path | None = Field(
        default=None, description="Directory for JSON exports; None disables export"
    )
    glossary: Path | None = Field(default=None, description="YAML glossary of blights, statuses and panels")
    max_bad_records: int = Field(default=5, ge=0, description="Rejected records a load tolerates")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> Settings:
        """Build settings from ``CHIPDEX_*`` environment variables.

        Args:
            env_file: ``.env`` file to load first; defaults to searching
                from the working directory

        Raises:
            pydantic.ValidationError: If a variable has an invalid value
        """
        if not load_dotenv(env_file):
            logger.debug("No .env file loaded, using the process environment")

        values: dict[str, object] = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is None or raw == "":
                continue
            if name == "load_custom_chips":
                values[name] = raw.strip().lower() in _TRUE_VALUES
            else:
                values[name] = raw
        return cls(**values)

    @property
    def sources(self) -> dict[RecordKind, str | None]:
        """Source URL per record kind."""
        return {
            RecordKind.CHIP: self.chip_url,
            RecordKind.NCP: self.ncp_url,
            RecordKind.VIRUS: self.virus_url,
        }


__all__ = ["Settings", "ENV_PREFIX"]
