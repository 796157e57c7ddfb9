from __future__ import annotations

import asyncio
from typing import Dict, Optional

import httpx

from .config import RefreshConfig
from .etag import fingerprint
from .logging import get_logger
from .models import CacheEntry, Failed, FetchOutcome, NotModified, Updated

logger = get_logger(__name__)


DEFAULT_USER_AGENT = "people-api/0.1 (+https://github.com/cncf/people)"


def build_client(config: RefreshConfig) -> httpx.AsyncClient:
    """Pooled client shared by every refresh tick."""
    return httpx.AsyncClient(
        timeout=config.timeout,
        limits=httpx.Limits(
            max_connections=config.max_connections,
            max_keepalive_connections=config.max_connections,
        ),
        headers={"User-Agent": DEFAULT_USER_AGENT},
        follow_redirects=True,
    )


class RemoteFetcher:
    """Performs conditional GETs against the upstream people.json.

    ``timeout`` bounds the whole attempt, body included. The client's own
    timeouts only limit each connect or read step, so a server trickling bytes
    would otherwise hold a tick open indefinitely.
    """

    def __init__(
        self,
        url: str,
        client: Optional[httpx.AsyncClient] = None,
        *,
        config: Optional[RefreshConfig] = None,
    ) -> None:
        config = config or RefreshConfig()
        self.url = url
        self.timeout = config.timeout
        self._owns_client = client is None
        self.client = client or build_client(config)

    async def fetch(self, etag: Optional[str] = None, *, trace_id: str | None = None) -> FetchOutcome:
        headers: Dict[str, str] = {}
        if etag:
            headers["If-None-Match"] = etag

        logger.debug("http.fetch", trace_id=trace_id, url=self.url, conditional=bool(etag))
        try:
            response = await asyncio.wait_for(self.client.get(self.url, headers=headers), self.timeout)
        except asyncio.TimeoutError:
            return Failed(reason=f"timed out after {self.timeout}s")
        except httpx.HTTPError as exc:
            return Failed(reason=f"{type(exc).__name__}: {exc}")

        if response.status_code == httpx.codes.OK:
            body = response.content
            upstream_etag = response.headers.get("ETag")
            return Updated(CacheEntry(body=body, etag=upstream_etag or fingerprint(body)))
        if response.status_code == httpx.codes.NOT_MODIFIED:
            return NotModified()
        return Failed(reason=f"unexpected status: {response.status_code}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
