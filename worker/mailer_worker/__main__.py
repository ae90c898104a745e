"""Entry point: ``python -m mailer_worker``."""

from __future__ import annotations

import uvicorn

from mailer_common import setup_logging

from .app import SERVICE_NAME
from .config import WorkerConfig


def main() -> None:
    config = WorkerConfig()
    setup_logging(json=config.log_json, level=config.log_level, service=SERVICE_NAME)

    uvicorn.run(
        "mailer_worker.app:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
