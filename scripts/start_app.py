#!/usr/bin/env python3
"""Start the comment tree API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from commenttree.config import Settings
from commenttree.util.logging import setup_logging
from commenttree.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        logfire.info("Starting comment tree API", host=settings.host, port=settings.port)

        uvicorn.run(
            "commenttree.interface.api.app:app",
            host=settings.host,
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
