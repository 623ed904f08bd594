"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields and point
at a MongoDB instance running on the local machine, which is what a
developer gets out of the box.  In a production deployment override
them via environment variables (for example ``MONGO_URL``).
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Budget Tracker API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Connection string for the document store.  The database and
    # collection names are fixed by default so that existing data written
    # by earlier deployments keeps being found.
    mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "budgetTrackerDB")
    mongo_collection: str = os.getenv("MONGO_COLLECTION", "transactions")
    # How long the driver waits for a reachable server before giving up.
    mongo_timeout_ms: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    # All routes are mounted under this prefix (``/api/transactions``,
    # ``/api/summary``).  Use an empty string to serve them from the root.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # Directory holding the browser front end.  When set it is served at
    # ``/`` after the API routes have been registered.
    static_dir: Optional[str] = os.getenv("STATIC_DIR") or None

    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
