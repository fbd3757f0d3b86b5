"""Catalog registry."""

from ..errors import ConfigurationMissing
from .base import BaseCatalog
from .google_books import GoogleBooksCatalog

ALL_CATALOGS = {
    "google_books": GoogleBooksCatalog,
}


def get_catalog_class(name: str):
    try:
        return ALL_CATALOGS[name]
    except KeyError:
        raise ConfigurationMissing(
            f"Unknown catalog '{name}', expected one of: {', '.join(ALL_CATALOGS)}"
        ) from None


__all__ = ["ALL_CATALOGS", "BaseCatalog", "GoogleBooksCatalog", "get_catalog_class"]
