#!/usr/bin/env python3
"""Upgrade the database schema to the latest revision.

Runs before the API starts in the container; a failure exits non-zero so
the app never serves against a stale schema.
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from fieldops.config import Settings
from fieldops.util.logging import setup_logging
from fieldops.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def build_config(settings: Settings) -> Config:
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(ALEMBIC_INI.parent / "migrations"))
    config.set_main_option("sqlalchemy.url", settings.database_url)
    config.attributes["skip_logging_config"] = True
    return config


def main(revision: str = "head") -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    with logfire.span("run_migrations", revision=revision, environment=settings.environment):
        try:
            command.upgrade(build_config(settings), revision)
        except Exception:
            logfire.exception("Database migration failed", revision=revision)
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
