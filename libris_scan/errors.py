"""Exception taxonomy for catalog access and startup configuration."""

from typing import Optional


class LibrisScanError(Exception):
    pass


class QuotaExceeded(LibrisScanError):
    """Remote catalog refused the request with 429 or 403."""

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Quota exceeded (HTTP {status_code}) for {url}")


class TransientError(LibrisScanError):
    """Any other network, HTTP or parse failure. Never fatal to a run."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigurationMissing(LibrisScanError):
    """A required credential or config artifact is absent at startup."""
