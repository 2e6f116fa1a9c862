"""Domain exceptions for the movie catalog

Every failure an operation can report derives from CatalogError, carrying
the HTTP status the request handlers map it to.
"""
from typing import Optional


class CatalogError(Exception):
    """Base exception for all catalog errors"""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(CatalogError):
    """A movie field is missing, malformed or out of range"""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(CatalogError):
    """No movie record matches the given id"""

    status_code = 404

    def __init__(self, movie_id: str):
        super().__init__(f"Movie not found: {movie_id}")
        self.movie_id = movie_id


class UploadError(CatalogError):
    """The media host is unreachable or rejected the request"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


class ServiceError(CatalogError):
    """The assistant API is unreachable or rejected the request"""

    def __init__(self, message: str, service_name: str = "gemini", original_error: Optional[Exception] = None):
        super().__init__(message)
        self.service_name = service_name
        self.original_error = original_error
