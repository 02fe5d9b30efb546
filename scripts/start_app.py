#!/usr/bin/env python3
"""Start the comments API, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from chemwiki.config import Settings
from chemwiki.util.observability import configure_logfire


def main() -> int:
    """Configure observability, then hand over to uvicorn."""
    settings = Settings()

    # Before the app import, so import-time errors are captured too
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting comments API",
            environment=settings.environment,
            port=settings.port,
        )
        uvicorn.run(
            "chemwiki.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
