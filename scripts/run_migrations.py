#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking."""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from rollcall.config import Settings
from rollcall.util.logging import setup_logging
from rollcall.util.observability import configure_logfire

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()

    # Configure logging and Logfire
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations")

        # Alembic is configured from settings, there is no alembic.ini
        alembic_cfg = Config()
        alembic_cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
        alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)

        command.upgrade(alembic_cfg, "head")

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so a deploy never runs against a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
