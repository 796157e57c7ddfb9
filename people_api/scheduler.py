from __future__ import annotations

from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from people_api.config import RefreshConfig
from people_api.logging import get_logger

logger = get_logger(__name__)


def build_scheduler(job: Callable[[], Awaitable[object]], config: RefreshConfig) -> Optional[AsyncIOScheduler]:
    if not config.enabled:
        logger.info("scheduler.disabled")
        return None

    scheduler = AsyncIOScheduler()
    trigger = IntervalTrigger(seconds=config.interval)
    # First tick fires as soon as the scheduler starts to warm the remote cache.
    scheduler.add_job(
        job,
        trigger=trigger,
        id="refresh-remote",
        next_run_time=datetime.now(timezone.utc),
        max_instances=1,
        coalesce=True,
        misfire_grace_time=None,
    )
    logger.info("scheduler.configured", interval_seconds=config.interval)
    return scheduler
