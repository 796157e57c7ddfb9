from __future__ import annotations

import time
from typing import Optional

import httpx
from fastapi import FastAPI, Header, Request, Response
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

from people_api.cache import EMBEDDED_EXAMPLE, RemoteCacheSlot, load_local
from people_api.conditional import conditional_response
from people_api.config import AppConfig, app_config
from people_api.http_client import RemoteFetcher
from people_api.logging import get_logger, setup_logging
from people_api.models import CacheEntry
from people_api.refresher import RemoteRefresher
from people_api.scheduler import build_scheduler

logger = get_logger(__name__)


def create_app(config: Optional[AppConfig] = None, *, client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    config = config or app_config
    setup_logging(config.logging, force=True)

    local_cache = load_local(config.sources.local_path)
    example_cache = CacheEntry.from_bytes(EMBEDDED_EXAMPLE)
    remote_cache = RemoteCacheSlot()
    fetcher = RemoteFetcher(config.sources.remote_url, client=client, config=config.refresh)
    refresher = RemoteRefresher(remote_cache, fetcher)
    scheduler = build_scheduler(refresher.refresh_once, config.refresh)

    app = FastAPI(title="People API")
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.state.local_cache = local_cache
    app.state.remote_cache = remote_cache
    app.state.refresher = refresher
    app.state.fetcher = fetcher
    app.state.scheduler = scheduler

    @app.middleware("http")
    async def _log_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    @app.get("/healthz", response_class=PlainTextResponse)
    def healthz() -> str:
        return "ok"

    @app.get("/local/people")
    def local_people(if_none_match: Optional[str] = Header(default=None)) -> Response:
        return conditional_response(local_cache, if_none_match)

    @app.get("/people")
    def remote_people(if_none_match: Optional[str] = Header(default=None)) -> Response:
        entry = remote_cache.get()
        if entry is None:
            # Nothing fetched yet: answer exactly as /local/people would.
            return local_people(if_none_match)
        return conditional_response(entry, if_none_match)

    @app.get("/example")
    def example(if_none_match: Optional[str] = Header(default=None)) -> Response:
        return conditional_response(example_cache, if_none_match)

    @app.on_event("startup")
    async def _start_scheduler() -> None:
        if scheduler and not scheduler.running:
            logger.info("scheduler.start")
            scheduler.start()

    @app.on_event("shutdown")
    async def _stop_scheduler() -> None:
        if scheduler and scheduler.running:
            logger.info("scheduler.stop")
            scheduler.shutdown(wait=False)
        # The client must outlive a tick that is still in flight.
        await refresher.drain()
        await fetcher.aclose()

    return app
