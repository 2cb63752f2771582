"""Standard library logging for scripts and third-party libraries.

Application events go through logfire; this only sets the baseline that
alembic, SQLAlchemy, httpx and smtplib write to.
"""

import logging
import sys

from rollcall.config import Settings

LEVELS = {
    "production": logging.WARNING,
    "staging": logging.INFO,
    "development": logging.INFO,
    "test": logging.WARNING,
}

# Chatty libraries that only matter when something is wrong
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "redis", "alembic.runtime")


def log_level(settings: Settings) -> int:
    """Level for the root logger; debug mode overrides the environment."""
    if settings.debug:
        return logging.DEBUG
    return LEVELS.get(settings.environment, logging.INFO)


def setup_logging(settings: Settings) -> None:
    """Configure console logging.

    Args:
        settings: Application settings
    """
    level = log_level(settings)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger("rollcall").debug(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
