"""Abstract base class for remote book catalogs."""

from abc import ABC, abstractmethod
from typing import List

from ..config import CatalogConfig
from ..fetcher import Fetcher
from ..models import CatalogIdentifier, VolumeRecord


class BaseCatalog(ABC):
    name: str = ""

    def __init__(self, config: CatalogConfig, fetcher: Fetcher):
        self.config = config
        self.fetcher = fetcher

    @abstractmethod
    def search(self, query: str) -> List[CatalogIdentifier]:
        """Identifiers of every volume matching a free-text query.

        Raises QuotaExceeded or TransientError.
        """
        ...

    @abstractmethod
    def fetch_by_identifier(self, isbn: str) -> VolumeRecord:
        """Raw metadata document for one ISBN. Raises QuotaExceeded or TransientError."""
        ...

    def download_cover(self, url: str) -> bytes:
        return self.fetcher.get_bytes(url)

    def close(self):
        self.fetcher.close()
