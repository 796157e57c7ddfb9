from __future__ import annotations

import logging as py_logging
from typing import Optional

import structlog

from people_api.config import LoggingConfig, app_config

_configured = False

# Transport level chatter is kept out of the default INFO stream.
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "apscheduler")


def setup_logging(config: Optional[LoggingConfig] = None, *, force: bool = False) -> None:
    """Configure structlog and the stdlib root logger.

    Runs once with ``app_config.logging`` on first use of :func:`get_logger`;
    pass ``force=True`` to apply an explicit config afterwards. Loggers are not
    cached on first use so module-level loggers pick up a reconfiguration.
    """
    global _configured
    if _configured and not force:
        return

    config = config or app_config.logging
    level = getattr(py_logging, str(config.level).upper(), py_logging.INFO)

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if config.json else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    py_logging.basicConfig(level=level)
    py_logging.getLogger().setLevel(level)
    for name in _QUIET_LOGGERS:
        py_logging.getLogger(name).setLevel(max(level, py_logging.WARNING))
    _configured = True


def get_logger(name: str = __name__):
    if not _configured:
        setup_logging()
    return structlog.get_logger(name)
