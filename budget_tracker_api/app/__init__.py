"""
Application package initializer.

The package is split into ``core`` (configuration, logging, storage),
``schemas`` (request and response models), ``services`` (business
logic) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
