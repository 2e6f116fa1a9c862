"""
Pydantic Schemas - Main imports
"""

from .movie import *

__all__ = [
    "MovieFields", "MovieImage", "MovieCreate", "Movie", "AssistantSearchResult",
    "round_rating", "thumbnail_url_for",
    "validate_movie", "validate_movie_fields", "validate_movie_image",
]
