"""HTTP access for catalog clients: one shared client, status mapping, capped downloads."""

import logging
from typing import Optional

import httpx

from .config import DownloadConfig
from .errors import QuotaExceeded, TransientError

logger = logging.getLogger("libris_scan")

QUOTA_STATUS_CODES = (429, 403)


class Fetcher:
    def __init__(self, config: DownloadConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.config.timeout, connect=15),
                follow_redirects=True,
                headers={"User-Agent": self.config.user_agent},
                transport=self._transport,
            )
        return self._client

    def close(self):
        if self._client and not self._client.is_closed:
            self._client.close()

    def get(self, url: str, params: dict = None) -> httpx.Response:
        """GET a URL. Raises QuotaExceeded on 429/403, TransientError otherwise."""
        try:
            resp = self.client.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransientError(f"Request to {url} failed: {e}") from e

        if resp.status_code in QUOTA_STATUS_CODES:
            raise QuotaExceeded(resp.status_code, str(resp.request.url))
        if resp.is_error:
            raise TransientError(
                f"HTTP {resp.status_code} for {resp.request.url}", status_code=resp.status_code
            )
        return resp

    def get_text(self, url: str, params: dict = None) -> str:
        return self.get(url, params).text

    def get_bytes(self, url: str) -> bytes:
        """Stream a binary body, refusing anything over max_cover_size."""
        limit = self.config.max_cover_size
        chunks = []
        size = 0
        try:
            with self.client.stream("GET", url) as resp:
                if resp.status_code in QUOTA_STATUS_CODES:
                    raise QuotaExceeded(resp.status_code, url)
                if resp.is_error:
                    raise TransientError(f"HTTP {resp.status_code} for {url}",
                                         status_code=resp.status_code)

                content_length = resp.headers.get("content-length")
                if content_length and int(content_length) > limit:
                    raise TransientError(f"File too large: {content_length} bytes")

                for chunk in resp.iter_bytes(chunk_size=65536):
                    size += len(chunk)
                    if size > limit:
                        raise TransientError(f"File exceeded max size during download: {size} bytes")
                    chunks.append(chunk)
        except httpx.HTTPError as e:
            raise TransientError(f"Download of {url} failed: {e}") from e

        return b"".join(chunks)
