"""Logging configuration for the application.

Standard library records are forwarded to Logfire so that library logs
(uvicorn, alembic) and spans end up in the same place.
"""

import logging

import logfire

from fieldops.config import Settings

# Loggers that are noisy at INFO; their SQL and request lines are already
# captured by Logfire instrumentation
QUIET_LOGGERS = ("httpx", "httpcore", "asyncpg", "sqlalchemy.engine")


def setup_logging(settings: Settings) -> None:
    """Route standard library logging through Logfire.

    Call after ``configure_logfire`` so records carry the service metadata.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("fieldops").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
