"""
Models Package - Main imports
"""

# Document mapping
from .database import MOVIE_INDEXES, document_to_movie, movie_to_document, parse_object_id

# Pydantic schemas
from .schemas import (
    MovieFields, MovieImage, MovieCreate, Movie, AssistantSearchResult,
    round_rating, thumbnail_url_for,
    validate_movie, validate_movie_fields, validate_movie_image,
)

__all__ = [
    # Document mapping
    "MOVIE_INDEXES", "document_to_movie", "movie_to_document", "parse_object_id",

    # Movie schemas
    "MovieFields", "MovieImage", "MovieCreate", "Movie", "AssistantSearchResult",

    # Pure helpers
    "round_rating", "thumbnail_url_for",
    "validate_movie", "validate_movie_fields", "validate_movie_image",
]
