"""
Movie Catalog - Core Module
===========================

Shared components for the movie catalog application.

Components:
- config: Application configuration management
- database: MongoDB client lifecycle
- exceptions: Domain error taxonomy
- logging: Structured logging setup

Usage:
    from movie_catalog.core import settings, get_logger, Database
"""

from .config import settings, Settings
from .database import Database
from .exceptions import CatalogError, ValidationError, NotFoundError, UploadError, ServiceError
from .logging import get_logger, setup_logging

__all__ = [
    # Configuration
    "settings",
    "Settings",

    # Database
    "Database",

    # Errors
    "CatalogError",
    "ValidationError",
    "NotFoundError",
    "UploadError",
    "ServiceError",

    # Logging
    "get_logger",
    "setup_logging",
]
