"""
Main entrypoint for the Budget Tracker API.

This module assembles the FastAPI application, sets up logging and
includes the versioned router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn budget_tracker_api.app.main:app --reload

The MongoDB connection is opened once when the application starts and
kept on ``app.state`` for the lifetime of the process.  If it cannot
be established the startup fails and the server exits.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pymongo.collection import Collection

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import TransactionStore, open_store
from .core.exceptions import StorageError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    collection: Optional[Collection] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    collection : Optional[Collection]
        Collection to store transactions in.  When omitted a connection
        to ``settings.mongo_url`` is opened at startup.  Tests pass an
        in-memory collection here.
    app_settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    cfg = app_settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(cfg.log_level, cfg.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = None
        try:
            if collection is None:
                client, store = open_store(cfg)
            else:
                store = TransactionStore(collection)
                store.ensure_indexes()
        except StorageError:
            logger.critical("Failed to connect to MongoDB", exc_info=True)
            raise
        app.state.store = store
        try:
            yield
        finally:
            if client is not None:
                client.close()

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix=cfg.api_prefix)

    # Mounted last so that it never shadows an API route.
    if cfg.static_dir:
        static_path = Path(cfg.static_dir).resolve()
        app.mount("/", StaticFiles(directory=str(static_path), html=True), name="static")
        logger.info("Serving static files from %s", static_path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
