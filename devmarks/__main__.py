"""
Run the API with uvicorn: `python -m devmarks`.
"""

from __future__ import annotations

import logging
import sys

import uvicorn

from devmarks.core.config import ConfigError, Settings, configure_logging

logger = logging.getLogger("devmarks")


def main() -> None:
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        configure_logging()
        logger.error("config_invalid error=%s", exc)
        sys.exit(1)

    configure_logging(settings.log_level)

    from devmarks.main import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
