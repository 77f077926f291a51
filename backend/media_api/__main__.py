"""CLI entry point for launching the Mediashelf API with Uvicorn."""
import logging

import uvicorn

from .app import create_app
from .settings import MediaSettings


def main() -> None:
    """Start a development server for the Mediashelf API."""
    settings = MediaSettings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
