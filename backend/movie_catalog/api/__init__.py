"""
API Package
"""

from .router import api_router
from .deps import get_catalog_service, get_database

__all__ = ["api_router", "get_catalog_service", "get_database"]
