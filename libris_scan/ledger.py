"""Append-only record of source files that have been fully processed."""

import logging
import os
from typing import Set

logger = logging.getLogger("libris_scan")


class CompletionLedger:
    """One path per line, UTF-8. Lookups are case-insensitive.

    The file is only ever appended to; duplicate lines are harmless.
    """

    def __init__(self, path: str):
        self.path = path
        self._done: Set[str] = set()

    @staticmethod
    def _key(path: str) -> str:
        return path.strip().casefold()

    def load(self) -> Set[str]:
        self._done = set()
        if os.path.exists(self.path):
            with open(self.path, encoding="utf-8") as f:
                for line in f:
                    if line.strip():
                        self._done.add(self._key(line))
        logger.debug(f"Loaded {len(self._done)} ledger entries from {self.path}")
        return set(self._done)

    def contains(self, path: str) -> bool:
        return self._key(path) in self._done

    __contains__ = contains

    def __len__(self) -> int:
        return len(self._done)

    def mark_done(self, path: str):
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(path + "\n")
        self._done.add(self._key(path))
