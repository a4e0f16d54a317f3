"""
The library: the three catalogs, the unified catalog and the glossary.

A Library is the handle callers pass around; there is no module-level
instance. Reloading fetches the three documents concurrently, parses each
on a worker thread, and rebuilds the unified catalog only after all three
loads have finished. A kind whose fetch or load fails keeps its previous
contents and does not stop the other kinds.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from threading import RLock

import httpx

from .catalog import ChipCatalog, NCPCatalog, UnifiedCatalog, VirusCatalog
from .catalog.base import Catalog, coerce_token
from .config import Settings
from .errors import ChipdexError, SourceError
from .fields import RecordKind
from .glossary import Glossary
from .reports import LoadReport, ReloadReport
from .resolver import LookupResolver
from .sources import create_client, fetch_text, read_custom_chips

logger = logging.getLogger("chipdex")

EXPORT_FILES: dict[RecordKind, str] = {
    RecordKind.CHIP: "chips.json",
    RecordKind.NCP: "naviCust.json",
    RecordKind.VIRUS: "virusCompendium.json",
}


class Library:
    """Owns every catalog and rebuilds them together.

    Args:
        settings: Source URLs, export directory and load tolerance;
            defaults to ``Settings()`` (nothing configured)
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.chips = ChipCatalog(self.settings.max_bad_records)
        self.ncps = NCPCatalog(self.settings.max_bad_records)
        self.viruses = VirusCatalog(self.settings.max_bad_records)
        self.unified = UnifiedCatalog()
        self.glossary = (
            Glossary.load_yaml(self.settings.glossary) if self.settings.glossary else Glossary()
        )
        self._rebuild_lock = RLock()
        self._reload_lock = asyncio.Lock()

    def catalog(self, kind: RecordKind | str) -> Catalog:
        """The catalog holding records of ``kind``.

        Raises:
            FieldParseError: If ``kind`` is a string naming no record kind
        """
        kind = coerce_token(RecordKind, kind)
        return {
            RecordKind.CHIP: self.chips,
            RecordKind.NCP: self.ncps,
            RecordKind.VIRUS: self.viruses,
        }[kind]

    def resolver(self, kind: RecordKind | str | None = None) -> LookupResolver:
        """Resolver over one kind, or over the unified catalog when ``kind`` is None."""
        if kind is None:
            return LookupResolver(self.unified)
        return LookupResolver(self.catalog(kind))

    # =========================================================================
    # Loading
    # =========================================================================

    def load_texts(
        self,
        chips: str | None = None,
        ncps: str | None = None,
        viruses: str | None = None,
    ) -> ReloadReport:
        """Load already-fetched documents; kinds passed as None are left as they are."""
        report = ReloadReport()
        texts = {RecordKind.CHIP: chips, RecordKind.NCP: ncps, RecordKind.VIRUS: viruses}
        for kind, text in texts.items():
            if text is None:
                continue
            try:
                report.reports[kind] = self._load_kind(kind, text)
            except ChipdexError as e:
                logger.error(f"❌ {kind.label} load failed: {e}")
                report.errors[kind] = str(e)
        self._rebuild_unified(report)
        return report

    async def reload(self, client: httpx.AsyncClient | None = None) -> ReloadReport:
        """Fetch every configured document and reload the catalogs.

        Args:
            client: HTTP client to fetch with; one is created (and closed)
                from the settings' timeout when omitted
        """
        async with self._reload_lock:
            report = ReloadReport()
            owns_client = client is None
            client = client or create_client(self.settings.timeout)
            try:
                texts = await self._fetch_all(client, report)
            finally:
                if owns_client:
                    await client.aclose()

            kinds = list(texts)
            results = await asyncio.gather(
                *(asyncio.to_thread(self._load_kind, kind, texts[kind]) for kind in kinds),
                return_exceptions=True,
            )
            for kind, result in zip(kinds, results):
                if isinstance(result, ChipdexError):
                    logger.error(f"❌ {kind.label} load failed: {result}")
                    report.errors[kind] = str(result)
                elif isinstance(result, BaseException):
                    raise result
                else:
                    report.reports[kind] = result

            self._rebuild_unified(report)
            logger.info(f"📚 Reload finished: {report.unified_count} entries")
            return report

    async def _fetch_all(self, client: httpx.AsyncClient, report: ReloadReport) -> dict[RecordKind, str]:
        urls = {kind: url for kind, url in self.settings.sources.items() if url}
        for kind in RecordKind:
            if kind not in urls:
                report.errors[kind] = "no source URL configured"

        kinds = list(urls)
        results = await asyncio.gather(
            *(fetch_text(client, urls[kind]) for kind in kinds),
            return_exceptions=True,
        )

        texts: dict[RecordKind, str] = {}
        for kind, result in zip(kinds, results):
            if isinstance(result, SourceError):
                logger.error(f"❌ Could not fetch {kind.label} source: {result}")
                report.errors[kind] = str(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                texts[kind] = result

        if RecordKind.CHIP in texts:
            try:
                texts[RecordKind.CHIP] = self._with_custom_chips(texts[RecordKind.CHIP])
            except SourceError as e:
                logger.error(f"❌ {e}")
                report.errors[RecordKind.CHIP] = str(e)
                del texts[RecordKind.CHIP]
        return texts

    def _with_custom_chips(self, text: str) -> str:
        path = self.settings.custom_chips
        if not self.settings.load_custom_chips or path is None:
            return text
        logger.debug(f"Appending custom chips from {path}")
        return f"{text}\n{read_custom_chips(path)}"

    def _load_kind(self, kind: RecordKind, text: str) -> LoadReport:
        report = self.catalog(kind).load(text)
        self._export(kind)
        return report

    def _export(self, kind: RecordKind) -> None:
        """Write the catalog to the export directory; failures are only logged."""
        export_dir = self.settings.export_dir
        if export_dir is None:
            return
        path = Path(export_dir) / EXPORT_FILES[kind]
        try:
            self.catalog(kind).export_json(path)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not export {kind.label} catalog to {path}: {e}")

    def _rebuild_unified(self, report: ReloadReport) -> None:
        with self._rebuild_lock:
            try:
                report.unified_count = self.unified.rebuild(self.chips, self.ncps, self.viruses)
            except ChipdexError as e:
                logger.error(f"❌ Full library not rebuilt: {e}")
                report.unified_error = str(e)
                report.unified_count = len(self.unified)

    def __repr__(self) -> str:
        return (
            f"Library(chips={len(self.chips)}, ncps={len(self.ncps)}, "
            f"viruses={len(self.viruses)})"
        )


__all__ = ["Library", "EXPORT_FILES"]
