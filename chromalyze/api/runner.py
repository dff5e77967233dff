"""Entry point for serving the HTTP API."""

from __future__ import annotations

import uvicorn

from chromalyze.api.main import create_app
from chromalyze.config.settings import get_settings
from chromalyze.monitoring.logging import configure_logging


def main() -> None:
    """Configure logging and serve the API until interrupted."""

    configure_logging()
    settings = get_settings()
    uvicorn.run(create_app(), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
