#!/usr/bin/env python3
"""Serve the Quill API with uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from quill.config import Settings
from quill.util.logging import setup_logging
from quill.util.observability import configure_logfire


def main() -> int:
    """Configure observability, then hand over to uvicorn."""
    settings = Settings()

    # Must run before the app module is imported by uvicorn
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting Quill API",
            host=settings.host,
            port=settings.port,
            git_sha=settings.git_sha,
        )
        uvicorn.run(
            "quill.interface.api.app:app",
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
