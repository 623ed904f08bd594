"""
Logging for the budget tracker.

Records from every module go through the root logger.  ``setup_logging``
writes them to stderr and, when ``LOG_FILE`` is configured, to a file
as well.  The handlers it installs are tagged with ``HANDLER_NAME``, so
a second call (``create_app`` runs once per application instance) is a
no-op while handlers attached by uvicorn or a test runner are left
alone and do not count.

The MongoDB driver emits a record for every command and heartbeat at
``DEBUG``; its loggers are capped at ``WARNING`` unless the whole
application runs at ``DEBUG``.
"""

import logging
from pathlib import Path
from typing import List, Optional

HANDLER_NAME = "budget_tracker"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DRIVER_LOGGERS = ("pymongo", "pymongo.command", "pymongo.connection", "pymongo.serverSelection")


def _installed_handlers(logger: logging.Logger) -> List[logging.Handler]:
    return [handler for handler in logger.handlers if handler.get_name() == HANDLER_NAME]


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Route application logs to stderr and optionally ``logfile``.

    ``level`` is a level name such as ``"info"``; unknown names mean
    ``INFO``.
    """
    root = logging.getLogger()
    if _installed_handlers(root):
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    for handler in _build_handlers(logfile):
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in DRIVER_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
