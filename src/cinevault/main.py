"""Command-line entry point.

Runs the API with uvicorn, using settings from the environment
(see cinevault.config).

Usage:
    cinevault
    # or
    uvicorn cinevault.api.app:create_app --factory --port 4000
"""

from __future__ import annotations

import logging

import uvicorn

from cinevault.api.app import create_app
from cinevault.config import Settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Configure logging and serve the application."""
    settings = Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings=settings)
    logger.info(f"Server running on http://{settings.host}:{settings.port}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
