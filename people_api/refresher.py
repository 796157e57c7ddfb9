from __future__ import annotations

import asyncio
import uuid

from .cache import RemoteCacheSlot
from .http_client import RemoteFetcher
from .logging import get_logger
from .models import Failed, FetchOutcome, NotModified, Updated

logger = get_logger(__name__)


class RemoteRefresher:
    """Keeps a :class:`RemoteCacheSlot` in sync with the upstream source.

    Each call to :meth:`refresh_once` is one tick: it sends the slot's current
    ETag as a precondition, swaps in the new entry on a 200, leaves the slot
    alone on a 304, and logs anything else without raising, so the slot always
    holds the last good entry.
    """

    def __init__(self, slot: RemoteCacheSlot, fetcher: RemoteFetcher) -> None:
        self.slot = slot
        self.fetcher = fetcher
        self._busy = asyncio.Lock()

    async def refresh_once(self) -> FetchOutcome:
        async with self._busy:
            return await self._refresh()

    async def drain(self) -> None:
        """Wait until a tick in flight, if any, has finished."""
        async with self._busy:
            pass

    async def _refresh(self) -> FetchOutcome:
        trace_id = uuid.uuid4().hex
        current_etag = self.slot.current_etag()
        outcome = await self.fetcher.fetch(current_etag, trace_id=trace_id)

        if isinstance(outcome, Updated):
            self.slot.replace(outcome.entry)
            logger.info(
                "remote.refreshed",
                trace_id=trace_id,
                url=self.fetcher.url,
                etag=outcome.entry.etag,
                size=len(outcome.entry.body),
            )
        elif isinstance(outcome, NotModified):
            logger.info("remote.not_modified", trace_id=trace_id, url=self.fetcher.url, etag=current_etag)
        elif isinstance(outcome, Failed):
            logger.error(
                "remote.refresh_failed",
                trace_id=trace_id,
                url=self.fetcher.url,
                error=outcome.reason,
                warm=current_etag is not None,
            )
        return outcome
