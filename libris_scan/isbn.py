"""ISBN normalization: everything is stored and compared as ISBN-13."""

import logging
from typing import Iterable, List

from .models import CatalogIdentifier

logger = logging.getLogger("libris_scan")

ISBN_13 = "ISBN_13"
ISBN_10 = "ISBN_10"

BOOKLAND_PREFIX = "978"


def _digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def isbn10_to_13(isbn10: str) -> str:
    """Convert a 10-digit ISBN to its 13-digit form.

    Anything that is not exactly 10 characters long, or whose first nine
    characters are not digits, is returned unchanged.
    """
    if len(isbn10) != 10 or not _digits(isbn10[:9]):
        return isbn10

    stem = BOOKLAND_PREFIX + isbn10[:9]
    total = sum(int(ch) * (1 if i % 2 == 0 else 3) for i, ch in enumerate(stem))
    return stem + str((10 - total % 10) % 10)


def collect_identifiers(entries: Iterable[CatalogIdentifier]) -> List[str]:
    """ISBN-13 values from search entries, in first-seen order, without duplicates.

    Values that do not end up as 13 digits are dropped.
    """
    seen = set()
    result = []
    for entry in entries:
        if not entry.value:
            continue
        if entry.type == ISBN_13:
            isbn = entry.value
        elif entry.type == ISBN_10:
            isbn = isbn10_to_13(entry.value)
        else:
            continue
        if len(isbn) != 13 or not _digits(isbn):
            logger.debug(f"Ignoring malformed {entry.type} '{entry.value}'")
            continue
        if isbn not in seen:
            seen.add(isbn)
            result.append(isbn)
    return result
