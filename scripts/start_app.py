#!/usr/bin/env python3
"""Start the invite API under uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from portal.config import Settings
from portal.util.error import ConfigurationError
from portal.util.logging import setup_logging
from portal.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Before anything else so startup errors are traced
    configure_logfire(settings)
    setup_logging(settings)

    placeholders = settings.placeholder_secrets()
    if placeholders:
        error = ConfigurationError(placeholders, settings.environment)
        logfire.error("Refusing to start", error=str(error))
        return 1

    try:
        logfire.info(
            "Starting invite API",
            port=settings.port,
            scheduler_enabled=settings.scheduler.enabled,
        )
        uvicorn.run(
            "portal.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0
    except Exception as e:
        logfire.error(
            "Invite API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
