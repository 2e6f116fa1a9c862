"""
Database Models - Document mapping for the movies collection
"""

from .movie import MOVIE_INDEXES, document_to_movie, movie_to_document, parse_object_id

__all__ = ["MOVIE_INDEXES", "document_to_movie", "movie_to_document", "parse_object_id"]
