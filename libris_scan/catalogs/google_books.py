"""Google Books volumes API."""

import json
import logging
from typing import List

from ..errors import TransientError
from ..models import CatalogIdentifier, VolumeRecord
from .base import BaseCatalog

logger = logging.getLogger("libris_scan")


def _dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _list(value) -> list:
    return value if isinstance(value, list) else []


class GoogleBooksCatalog(BaseCatalog):
    name = "google_books"

    VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"

    def _params(self, q: str, **extra) -> dict:
        params = {"q": q, **extra}
        if self.config.api_key:
            params["key"] = self.config.api_key
        return params

    @staticmethod
    def _parse(body: str) -> dict:
        try:
            data = json.loads(body)
        except ValueError as e:
            raise TransientError(f"Invalid JSON from Google Books: {e}") from e
        if not isinstance(data, dict):
            raise TransientError("Unexpected Google Books response shape")
        return data

    def search(self, query: str) -> List[CatalogIdentifier]:
        body = self.fetcher.get_text(
            self.VOLUMES_URL, self._params(query, maxResults=self.config.max_results)
        )
        data = self._parse(body)

        entries = []
        for item in _list(data.get("items")):
            info = _dict(_dict(item).get("volumeInfo"))
            for ident in _list(info.get("industryIdentifiers")):
                ident = _dict(ident)
                id_type, value = ident.get("type"), ident.get("identifier")
                if isinstance(id_type, str) and isinstance(value, str):
                    entries.append(CatalogIdentifier(type=id_type, value=value))
        logger.debug(f"[{self.name}] '{query}': {len(entries)} identifiers")
        return entries

    def fetch_by_identifier(self, isbn: str) -> VolumeRecord:
        body = self.fetcher.get_text(self.VOLUMES_URL, self._params(f"isbn:{isbn}"))
        data = self._parse(body)

        items = _list(data.get("items"))
        if not items:
            return VolumeRecord(found=False)

        info = _dict(_dict(items[0]).get("volumeInfo"))
        thumbnail = _dict(info.get("imageLinks")).get("thumbnail")
        if not isinstance(thumbnail, str) or not thumbnail:
            thumbnail = None
        return VolumeRecord(found=True, raw_body=body, thumbnail_url=thumbnail)
