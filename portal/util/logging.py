"""Logging configuration for the application."""

import logging
import sys

import logfire

from portal.config import Settings

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "apscheduler", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging into Logfire.

    Application code logs through ``logfire`` directly; this catches what
    uvicorn, SQLAlchemy and APScheduler emit through ``logging`` so it lands
    in the same traces. A plain stdout handler is kept in development so the
    console stays readable without a Logfire token.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    handlers: list[logging.Handler] = [logfire.LogfireLoggingHandler()]
    if settings.environment == "development":
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(console)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
    )
