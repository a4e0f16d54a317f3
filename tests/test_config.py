"""
Tests for environment-driven settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chipdex.config import Settings
from chipdex.fields import RecordKind

ENV_NAMES = [
    "CHIPDEX_CHIP_URL",
    "CHIPDEX_NCP_URL",
    "CHIPDEX_VIRUS_URL",
    "CHIPDEX_CUSTOM_CHIPS",
    "CHIPDEX_LOAD_CUSTOM_CHIPS",
    "CHIPDEX_EXPORT_DIR",
    "CHIPDEX_GLOSSARY",
    "CHIPDEX_MAX_BAD_RECORDS",
    "CHIPDEX_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start from an empty CHIPDEX_* environment and restore it afterwards."""
    for name in ENV_NAMES:
        # setenv first so teardown also undoes values a .env file sets
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)


@pytest.fixture
def no_env_file(tmp_path: Path) -> Path:
    return tmp_path / "missing.env"


def test_defaults(no_env_file):
    settings = Settings.from_env(no_env_file)

    assert settings.chip_url is None
    assert settings.export_dir is None
    assert settings.load_custom_chips is False
    assert settings.max_bad_records == 5
    assert settings.timeout == 30.0


def test_from_environment(monkeypatch, no_env_file):
    monkeypatch.setenv("CHIPDEX_CHIP_URL", "https://example.test/chips.txt")
    monkeypatch.setenv("CHIPDEX_EXPORT_DIR", "/tmp/chipdex")
    monkeypatch.setenv("CHIPDEX_LOAD_CUSTOM_CHIPS", "yes")
    monkeypatch.setenv("CHIPDEX_MAX_BAD_RECORDS", "2")
    monkeypatch.setenv("CHIPDEX_TIMEOUT", "5.5")

    settings = Settings.from_env(no_env_file)

    assert settings.chip_url == "https://example.test/chips.txt"
    assert settings.export_dir == Path("/tmp/chipdex")
    assert settings.load_custom_chips is True
    assert settings.max_bad_records == 2
    assert settings.timeout == 5.5
    assert settings.sources[RecordKind.CHIP] == "https://example.test/chips.txt"
    assert settings.sources[RecordKind.VIRUS] is None


def test_env_file(tmp_path: Path):
    env_file = tmp_path / ".env"
    env_file.write_text("CHIPDEX_NCP_URL=https://example.test/ncps.txt\nCHIPDEX_MAX_BAD_RECORDS=1\n")

    settings = Settings.from_env(env_file)

    assert settings.ncp_url == "https://example.test/ncps.txt"
    assert settings.max_bad_records == 1


def test_empty_values_use_defaults(monkeypatch, no_env_file):
    monkeypatch.setenv("CHIPDEX_TIMEOUT", "")
    assert Settings.from_env(no_env_file).timeout == 30.0


@pytest.mark.parametrize(
    "name, value",
    [
        ("CHIPDEX_MAX_BAD_RECORDS", "-1"),
        ("CHIPDEX_MAX_BAD_RECORDS", "many"),
        ("CHIPDEX_TIMEOUT", "0"),
    ],
)
def test_invalid_values(monkeypatch, no_env_file, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings.from_env(no_env_file)
