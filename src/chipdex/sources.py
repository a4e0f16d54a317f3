"""
Fetching of the plain-text source documents.

Each document is downloaded once per reload. There is no retry: a failed
download fails that catalog's reload and the catalog keeps its contents.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from .errors import SourceError
from .text import normalize_text

logger = logging.getLogger("chipdex")

DEFAULT_TIMEOUT = 30.0


async def fetch_text(client: httpx.AsyncClient, url: str) -> str:
    """Download a document and normalise its text.

    Args:
        client: HTTP client to fetch with
        url: Document URL

    Returns:
        The normalised document text

    Raises:
        SourceError: On timeouts, transport errors and non-2xx responses
    """
    try:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise SourceError(f"Timed out fetching {url}", {"url": url}) from e
    except httpx.HTTPStatusError as e:
        raise SourceError(
            f"HTTP {e.response.status_code} fetching {url}",
            {"url": url, "status_code": e.response.status_code},
        ) from e
    except httpx.HTTPError as e:
        raise SourceError(f"Failed to fetch {url}: {e}", {"url": url}) from e

    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return normalize_text(response.text)


def read_custom_chips(path: Path) -> str:
    """Read a local file of extra chip line pairs.

    Raises:
        SourceError: If the file cannot be read
    """
    try:
        return normalize_text(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SourceError(f"Cannot read custom chips from {path}: {e}", {"path": str(path)}) from e


def create_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout)


__all__ = ["fetch_text", "read_custom_chips", "create_client", "DEFAULT_TIMEOUT"]
