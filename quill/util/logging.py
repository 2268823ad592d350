"""Standard-library logging setup.

Application events go through Logfire spans and logs. Libraries that log
through ``logging`` (uvicorn, alembic, asyncpg) are routed to Logfire as well
so one stream carries everything.
"""

import logging

import logfire

from quill.config import Settings

# Libraries that are chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "asyncpg", "uvicorn.access")


def log_level(settings: Settings) -> int:
    """Pick the root log level for the environment."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging into Logfire at the environment's level.

    Args:
        settings: Application settings
    """
    level = log_level(settings)

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,  # Replace handlers installed by uvicorn or alembic
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
    )
