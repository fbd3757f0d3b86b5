"""YAML config loader. Writes a default config.yaml on first run."""

import logging
import os
from dataclasses import dataclass, field
from typing import List

import yaml
from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationMissing

logger = logging.getLogger("libris_scan")

API_KEY_ENV = "GOOGLE_BOOKS_API_KEY"

DEFAULT_SEARCH_FILTERS = [
    r"\(Z-Library\)",
    r"-- Anna['’]s Archive",
    r"- libgen\.li",
    r"\(z-library\.sk, 1lib\.sk, z-lib\.sk\)",
]


@dataclass
class StorageConfig:
    metadata_dir: str = os.path.join("GoogleBooks", "Metadata")
    covers_dir: str = os.path.join("GoogleBooks", "Covers")
    ebook_source_dir: str = "E-Books Collections"


@dataclass
class CatalogConfig:
    name: str = "google_books"
    api_key: str = ""
    max_results: int = 10
    request_delay: float = 2.5


@dataclass
class DownloadConfig:
    timeout: int = 30
    user_agent: str = "LibrisScan/1.0 (metadata crawler)"
    max_cover_size: int = 10 * 1024 * 1024


@dataclass
class AppConfig:
    ledger_path: str = os.path.join("logs", "processed_files.log")
    log_dir: str = "logs"
    extensions: List[str] = field(default_factory=lambda: [".pdf", ".epub"])
    search_filters: List[str] = field(default_factory=lambda: list(DEFAULT_SEARCH_FILTERS))
    storage: StorageConfig = field(default_factory=StorageConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)

    def ensure_dirs(self):
        os.makedirs(self.storage.metadata_dir, exist_ok=True)
        os.makedirs(self.storage.covers_dir, exist_ok=True)
        ledger_dir = os.path.dirname(self.ledger_path)
        if ledger_dir:
            os.makedirs(ledger_dir, exist_ok=True)

    def require_api_key(self) -> str:
        if not self.catalog.api_key:
            raise ConfigurationMissing(
                f"No catalog API key: set {API_KEY_ENV} or catalog.api_key in the config file"
            )
        return self.catalog.api_key

    def require_source_dir(self) -> str:
        if not os.path.isdir(self.storage.ebook_source_dir):
            raise ConfigurationMissing(
                f"eBook source directory not found: {self.storage.ebook_source_dir}"
            )
        return self.storage.ebook_source_dir


def _section(cls, raw):
    raw = raw or {}
    return cls(**{k: v for k, v in raw.items() if k in cls.__dataclass_fields__})


def default_config_dict() -> dict:
    defaults = AppConfig()
    return {
        "storage": {
            "metadata_dir": defaults.storage.metadata_dir,
            "covers_dir": defaults.storage.covers_dir,
            "ebook_source_dir": defaults.storage.ebook_source_dir,
        },
        "ledger_path": defaults.ledger_path,
        "log_dir": defaults.log_dir,
        "extensions": list(defaults.extensions),
        "search_filters": list(defaults.search_filters),
        "catalog": {
            "name": defaults.catalog.name,
            "api_key": "",
            "max_results": defaults.catalog.max_results,
            "request_delay": defaults.catalog.request_delay,
        },
    }


def write_default_config(config_path: str):
    parent = os.path.dirname(config_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(default_config_dict(), f, sort_keys=False, allow_unicode=True)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    load_dotenv(find_dotenv(usecwd=True))

    if not os.path.exists(config_path):
        logger.warning(f"Config not found, creating default {config_path}")
        write_default_config(config_path)

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    defaults = AppConfig()
    catalog = _section(CatalogConfig, raw.get("catalog"))
    catalog.api_key = os.environ.get(API_KEY_ENV) or catalog.api_key or ""

    filters = raw.get("search_filters")
    return AppConfig(
        ledger_path=raw.get("ledger_path", defaults.ledger_path),
        log_dir=raw.get("log_dir", defaults.log_dir),
        extensions=raw.get("extensions") or defaults.extensions,
        search_filters=list(filters) if filters is not None else defaults.search_filters,
        storage=_section(StorageConfig, raw.get("storage")),
        catalog=catalog,
        download=_section(DownloadConfig, raw.get("download")),
    )
