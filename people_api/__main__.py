from __future__ import annotations

import uvicorn

from people_api.config import app_config
from people_api.logging import get_logger

logger = get_logger(__name__)


def main() -> None:
    server = app_config.server
    logger.info("server.start", host=server.host, port=server.port)
    # uvicorn exits non-zero when the address cannot be bound.
    uvicorn.run(
        "people_api.api:create_app",
        factory=True,
        host=server.host,
        port=server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
