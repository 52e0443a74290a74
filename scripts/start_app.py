#!/usr/bin/env python3
"""Serve the invites API with uvicorn.

Logfire is configured before the app module is imported, so failures while
building the container are reported too.
"""

import sys

import logfire
import uvicorn

from fieldops.config import Settings
from fieldops.util.logging import setup_logging
from fieldops.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting invites API",
        port=settings.port,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
    try:
        uvicorn.run(
            "fieldops.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            # uvicorn's own records reach Logfire through the root handler
            log_config=None,
            proxy_headers=True,
        )
    except Exception:
        logfire.exception("Invites API failed to start", port=settings.port)
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
