import pytest

from libris_scan.catalogs.base import BaseCatalog
from libris_scan.crawler import Crawler
from libris_scan.errors import TransientError
from libris_scan.ledger import CompletionLedger
from libris_scan.models import CatalogIdentifier, VolumeRecord
from libris_scan.store import LocalStore


class StubCatalog(BaseCatalog):
    """In-memory catalog. Values may be exceptions, which are raised when hit."""

    name = "stub"

    def __init__(self, search_results=None, records=None, covers=None):
        self.search_results = search_results or {}
        self.records = records or {}
        self.covers = covers or {}
        self.calls = []

    def search(self, query):
        self.calls.append(("search", query))
        result = self.search_results.get(query, [])
        if isinstance(result, Exception):
            raise result
        return result

    def fetch_by_identifier(self, isbn):
        self.calls.append(("fetch", isbn))
        record = self.records.get(isbn, VolumeRecord(found=False))
        if isinstance(record, Exception):
            raise record
        return record

    def download_cover(self, url):
        self.calls.append(("cover", url))
        data = self.covers.get(url)
        if data is None:
            raise TransientError(f"no cover at {url}")
        if isinstance(data, Exception):
            raise data
        return data

    def close(self):
        pass

    @property
    def remote_calls(self):
        return [c for c in self.calls if c[0] in ("search", "fetch")]


def isbn13(value):
    return CatalogIdentifier("ISBN_13", value)


def isbn10(value):
    return CatalogIdentifier("ISBN_10", value)


@pytest.fixture
def stores(tmp_path):
    return LocalStore(str(tmp_path / "meta"), ".json"), LocalStore(str(tmp_path / "covers"), ".jpg")


@pytest.fixture
def ledger(tmp_path):
    led = CompletionLedger(str(tmp_path / "logs" / "processed_files.log"))
    led.load()
    return led


@pytest.fixture
def make_crawler(ledger, stores):
    sleeps = []

    def _make(catalog, search_filters=()):
        meta, covers = stores
        crawler = Crawler(catalog, ledger, meta, covers,
                          search_filters=search_filters, request_delay=2.5,
                          sleep=sleeps.append)
        crawler.sleeps = sleeps
        return crawler

    return _make
