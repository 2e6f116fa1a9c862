"""
Data Services - Business logic layer
"""

from .movie_repository import MovieRepository
from .catalog_service import CatalogService

__all__ = ["MovieRepository", "CatalogService"]
