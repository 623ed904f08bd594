"""Entry point for the Budget Tracker API.

Starts the FastAPI application with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``3000``); the MongoDB connection string comes from
``MONGO_URL``.

If MongoDB cannot be reached at startup the server does not start and
the process exits with a non-zero status.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from budget_tracker_api.app.core.config import settings
from budget_tracker_api.app.main import app


async def main() -> int:
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        lifespan="on",
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()
    if not server.started:
        logging.getLogger(__name__).critical("Budget tracker server failed to start")
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
