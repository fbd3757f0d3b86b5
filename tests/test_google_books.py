import json

import httpx
import pytest

from libris_scan.catalogs import GoogleBooksCatalog, get_catalog_class
from libris_scan.config import CatalogConfig, DownloadConfig
from libris_scan.errors import ConfigurationMissing, QuotaExceeded, TransientError
from libris_scan.fetcher import Fetcher

SEARCH_BODY = {
    "items": [
        {"volumeInfo": {"title": "Dune", "industryIdentifiers": [
            {"type": "ISBN_10", "identifier": "0441013597"},
            {"type": "ISBN_13", "identifier": "9780441013593"},
        ]}},
        {"volumeInfo": {"title": "Dune Messiah"}},
        {"volumeInfo": {"industryIdentifiers": [{"type": "OTHER", "identifier": "UOM:1"}]}},
    ]
}

VOLUME_BODY = json.dumps({
    "totalItems": 1,
    "items": [{"volumeInfo": {
        "title": "Dune",
        "imageLinks": {"thumbnail": "http://books.google.com/books/content?id=x&img=1"},
    }}],
})


def make_catalog(handler, max_cover_size=1024):
    fetcher = Fetcher(DownloadConfig(max_cover_size=max_cover_size),
                      transport=httpx.MockTransport(handler))
    return GoogleBooksCatalog(CatalogConfig(api_key="secret", max_results=10), fetcher)


def test_search_sends_query_and_parses_identifiers():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json=SEARCH_BODY)

    entries = make_catalog(handler).search("Dune")
    assert seen == {"q": "Dune", "maxResults": "10", "key": "secret"}
    assert [(e.type, e.value) for e in entries] == [
        ("ISBN_10", "0441013597"),
        ("ISBN_13", "9780441013593"),
        ("OTHER", "UOM:1"),
    ]


def test_search_without_items():
    catalog = make_catalog(lambda request: httpx.Response(200, json={"totalItems": 0}))
    assert catalog.search("nothing") == []


@pytest.mark.parametrize("status", [429, 403])
def test_quota_statuses_raise_quota_exceeded(status):
    catalog = make_catalog(lambda request: httpx.Response(status))
    with pytest.raises(QuotaExceeded) as exc:
        catalog.search("Dune")
    assert exc.value.status_code == status
    with pytest.raises(QuotaExceeded):
        catalog.fetch_by_identifier("9780441013593")


def test_other_errors_are_transient():
    catalog = make_catalog(lambda request: httpx.Response(500))
    with pytest.raises(TransientError):
        catalog.search("Dune")

    def boom(request):
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(TransientError):
        make_catalog(boom).fetch_by_identifier("9780441013593")

    garbage = make_catalog(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(TransientError):
        garbage.search("Dune")


def test_fetch_found_keeps_raw_body():
    def handler(request):
        assert request.url.params["q"] == "isbn:9780441013593"
        return httpx.Response(200, text=VOLUME_BODY)

    record = make_catalog(handler).fetch_by_identifier("9780441013593")
    assert record.found
    assert record.raw_body == VOLUME_BODY
    assert record.thumbnail_url == "http://books.google.com/books/content?id=x&img=1"


def test_fetch_empty_items_is_not_found():
    catalog = make_catalog(lambda request: httpx.Response(200, json={"totalItems": 0, "items": []}))
    record = catalog.fetch_by_identifier("9780441013593")
    assert not record.found
    assert record.raw_body == ""


def test_fetch_without_thumbnail():
    body = {"items": [{"volumeInfo": {"title": "Dune"}}]}
    record = make_catalog(lambda request: httpx.Response(200, json=body)).fetch_by_identifier("1")
    assert record.found
    assert record.thumbnail_url is None


def test_cover_download_size_cap():
    small = make_catalog(lambda request: httpx.Response(200, content=b"\xff\xd8"))
    assert small.download_cover("https://img/x.jpg") == b"\xff\xd8"

    big = make_catalog(lambda request: httpx.Response(200, content=b"x" * 2048))
    with pytest.raises(TransientError):
        big.download_cover("https://img/x.jpg")


def test_unknown_catalog_name():
    assert get_catalog_class("google_books") is GoogleBooksCatalog
    with pytest.raises(ConfigurationMissing):
        get_catalog_class("worldcat")


def test_search_ignores_unexpected_shapes():
    body = {"items": [
        "oops",
        {"volumeInfo": ["not", "a", "dict"]},
        {"volumeInfo": {"industryIdentifiers": {"type": "ISBN_13"}}},
        {"volumeInfo": {"industryIdentifiers": [
            "9780441013593",
            {"type": "ISBN_13", "identifier": 9780441013593},
            {"type": "ISBN_13", "identifier": "9780441013593"},
        ]}},
    ]}
    entries = make_catalog(lambda request: httpx.Response(200, json=body)).search("Dune")
    assert [(e.type, e.value) for e in entries] == [("ISBN_13", "9780441013593")]


@pytest.mark.parametrize("volume", [
    {"volumeInfo": {"imageLinks": ["x"]}},
    {"volumeInfo": {"imageLinks": {"thumbnail": 42}}},
    {"volumeInfo": "Dune"},
    "oops",
])
def test_fetch_with_unexpected_shape_has_no_thumbnail(volume):
    catalog = make_catalog(lambda request: httpx.Response(200, json={"items": [volume]}))
    record = catalog.fetch_by_identifier("9780441013593")
    assert record.found
    assert record.thumbnail_url is None


def test_fetch_items_not_a_list_is_not_found():
    catalog = make_catalog(lambda request: httpx.Response(200, json={"items": {"a": 1}}))
    assert not catalog.fetch_by_identifier("9780441013593").found
