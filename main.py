"""
CarePair booking service entry point.

Serves the booking API with uvicorn, or runs the booking form in the
terminal against an in-process handler for development.

Usage:
    API server:   python main.py serve
    Console mode: python main.py console
"""

import logging
import sys

from carepair.config import settings

logger = logging.getLogger(__name__)


def _run_api_mode() -> None:
    """Start the booking API (uses MongoDB when MONGODB_URI is set)."""
    import uvicorn

    logger.info("Serving booking API on %s:%d", settings.api.host, settings.api.port)
    uvicorn.run(
        "carepair.api.app:app",
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.log_level.lower(),
    )


def _run_console_mode() -> None:
    """Start the console booking form (no database or SMTP required)."""
    from console_demo import ConsoleSession

    session = ConsoleSession()
    session.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "console":
        _run_console_mode()
    else:
        _run_api_mode()
