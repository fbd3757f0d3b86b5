"""Data models for the crawler."""

import os
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class SourceItem:
    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def title(self) -> str:
        return os.path.splitext(self.name)[0]


@dataclass(frozen=True)
class CatalogIdentifier:
    type: str  # ISBN_13, ISBN_10, OTHER
    value: str


@dataclass
class VolumeRecord:
    found: bool
    raw_body: str = ""
    thumbnail_url: Optional[str] = None


class FetchOutcome(str, Enum):
    SAVED = "saved"
    NOT_FOUND = "not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    ERROR = "error"


@dataclass
class FetchResult:
    outcome: FetchOutcome
    cover_saved: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is FetchOutcome.SAVED


@dataclass
class RunState:
    """Counters and the quota breaker for a single run. Not persisted."""

    total: int = 0
    skipped_by_ledger: int = 0
    skipped_existing: int = 0
    saved: int = 0
    not_found: int = 0
    failed: int = 0
    covers_saved: int = 0
    quota_exhausted: bool = False
    started_at: float = field(default_factory=time.monotonic)
    finished_at: Optional[float] = None

    def trip(self):
        self.quota_exhausted = True

    def is_tripped(self) -> bool:
        return self.quota_exhausted

    def finish(self):
        if self.finished_at is None:
            self.finished_at = time.monotonic()

    @property
    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at
