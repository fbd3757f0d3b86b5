"""Crawl loop: filename -> search -> ISBNs -> metadata + cover on disk.

Everything runs sequentially. The quota breaker lives on RunState and is
checked before every file and every ISBN; once tripped no further catalog
calls are made and the current file is left out of the ledger so the next
run picks it up again.
"""

import logging
import time
from typing import Callable, Iterable, List, Sequence

from .catalogs.base import BaseCatalog
from .errors import LibrisScanError, QuotaExceeded, TransientError
from .isbn import collect_identifiers
from .ledger import CompletionLedger
from .models import FetchOutcome, FetchResult, RunState, SourceItem
from .query import build_query
from .store import LocalStore

logger = logging.getLogger("libris_scan")


def secure_url(url: str) -> str:
    if url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


class Crawler:
    def __init__(self, catalog: BaseCatalog, ledger: CompletionLedger,
                 metadata_store: LocalStore, cover_store: LocalStore,
                 search_filters: Sequence[str] = (), request_delay: float = 2.5,
                 sleep: Callable[[float], None] = time.sleep):
        self.catalog = catalog
        self.ledger = ledger
        self.metadata_store = metadata_store
        self.cover_store = cover_store
        self.search_filters = list(search_filters)
        self.request_delay = request_delay
        self.sleep = sleep

    def run(self, paths: Iterable[str], state: RunState) -> RunState:
        """Process files in the order given until done or the quota runs out."""
        items = [SourceItem(p) for p in paths]
        state.total = len(items)

        for idx, item in enumerate(items, start=1):
            if state.is_tripped():
                logger.warning("Quota exhausted. Stopping scan...")
                break

            prefix = f"[{idx}/{state.total}]"
            if self.ledger.contains(item.path):
                state.skipped_by_ledger += 1
                logger.info(f"{prefix} Skipping: {item.name} (already processed)")
                continue

            logger.info(f"{prefix} ({idx / state.total:.0%}, saved {state.saved}) "
                        f"Searching: {item.title}")
            self.process_item(item, state)

        state.finish()
        return state

    def process_item(self, item: SourceItem, state: RunState) -> bool:
        """Search one file and fetch each ISBN found. Returns True if marked done."""
        isbns = self.search_identifiers(item, state)

        if not isbns and not state.is_tripped():
            logger.info("   No ISBNs found for this title.")

        for isbn in isbns:
            if state.is_tripped():
                break

            if self.metadata_store.exists(isbn):
                state.skipped_existing += 1
                logger.info(f"   {isbn}: exists")
                continue

            result = self.fetch_and_persist(isbn, state)
            self._record(isbn, result, state)
            self.sleep(self.request_delay)

        if state.is_tripped():
            logger.warning(f"   Quota hit while processing {item.name}; it will be retried next run")
            return False

        self.ledger.mark_done(item.path)
        return True

    def search_identifiers(self, item: SourceItem, state: RunState) -> List[str]:
        query = build_query(item.title, self.search_filters)
        try:
            entries = self.catalog.search(query)
        except QuotaExceeded as e:
            logger.error(f"   [SEARCH] {e}")
            state.trip()
            return []
        except TransientError as e:
            # The file is still marked done afterwards, same as a search with no hits.
            logger.error(f"   [SEARCH ERROR] {e}")
            return []
        return collect_identifiers(entries)

    def fetch_and_persist(self, isbn: str, state: RunState) -> FetchResult:
        try:
            record = self.catalog.fetch_by_identifier(isbn)
        except QuotaExceeded as e:
            state.trip()
            return FetchResult(FetchOutcome.QUOTA_EXCEEDED, error=str(e))
        except TransientError as e:
            return FetchResult(FetchOutcome.ERROR, error=str(e))

        if not record.found:
            return FetchResult(FetchOutcome.NOT_FOUND)

        try:
            self.metadata_store.write_text(isbn, record.raw_body)
        except OSError as e:
            return FetchResult(FetchOutcome.ERROR, error=f"could not write metadata: {e}")

        cover_saved = False
        if record.thumbnail_url:
            cover_saved = self._save_cover(isbn, secure_url(record.thumbnail_url))
        return FetchResult(FetchOutcome.SAVED, cover_saved=cover_saved)

    def _save_cover(self, isbn: str, url: str) -> bool:
        try:
            self.cover_store.write_bytes(isbn, self.catalog.download_cover(url))
        except (LibrisScanError, OSError) as e:
            logger.warning(f"   {isbn}: cover download failed: {e}")
            return False
        return True

    @staticmethod
    def _record(isbn: str, result: FetchResult, state: RunState):
        if result.ok:
            state.saved += 1
            if result.cover_saved:
                state.covers_saved += 1
            logger.info(f"   {isbn}: saved" + ("" if result.cover_saved else " (no cover)"))
        elif result.outcome is FetchOutcome.NOT_FOUND:
            state.not_found += 1
            logger.info(f"   {isbn}: not found")
        elif result.outcome is FetchOutcome.QUOTA_EXCEEDED:
            logger.error(f"   {isbn}: quota exceeded ({result.error})")
        else:
            state.failed += 1
            logger.error(f"   {isbn}: error ({result.error})")
