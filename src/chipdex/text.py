"""Cleanup of exported plain-text documents before parsing."""

from __future__ import annotations

# Curly apostrophes decoded with the wrong codec by the document export
_REPLACEMENTS = {
    "\u00e2\u20ac\u2122": "'",
    "\u2019": "'",
    "\ufeff": "",
    "\r": "",
}


def normalize_text(text: str) -> str:
    """Remove export artifacts (BOM, carriage returns, mangled apostrophes)."""
    for old, new in _REPLACEMENTS.items():
        text = text.replace(old, new)
    return text


def split_lines(text: str) -> list[str]:
    """Split text into lines, dropping blank ones.

    Lines keep their inner whitespace; only the trailing newline is removed.
    """
    return [line for line in normalize_text(text).split("\n") if line.strip()]


__all__ = ["normalize_text", "split_lines"]
