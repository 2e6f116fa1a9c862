"""
Services Package - Main imports
"""

# Data services
from .data import MovieRepository, CatalogService

# External services
from .external import GeminiAssistant, CloudinaryMediaStore, MediaUpload, StorageService

__all__ = [
    # Data services
    "MovieRepository",
    "CatalogService",

    # External services
    "GeminiAssistant",
    "CloudinaryMediaStore",
    "MediaUpload",
    "StorageService",
]
