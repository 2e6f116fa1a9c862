"""
Movie Document Model

Documents in the ``movies`` collection look like:

    {
        "_id": ObjectId,
        "title": str, "genre": str, "description": str,
        "rating": float, "release_year": int,
        "image_url": str, "media_public_id": str | None,
        "created_at": datetime, "updated_at": datetime,
    }
"""

from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING

from movie_catalog.models.schemas.movie import Movie, MovieCreate

# (keys, name) pairs created at startup
MOVIE_INDEXES: List[Tuple[List[Tuple[str, int]], str]] = [
    ([("rating", DESCENDING)], "rating_desc"),
    ([("genre", ASCENDING), ("rating", DESCENDING)], "genre_rating"),
]


def parse_object_id(movie_id: Any) -> Optional[ObjectId]:
    """Return the ObjectId for a path id, or None when it is malformed"""
    if isinstance(movie_id, ObjectId):
        return movie_id
    try:
        return ObjectId(str(movie_id))
    except (InvalidId, TypeError):
        return None


def movie_to_document(movie: MovieCreate) -> Dict[str, Any]:
    return movie.model_dump()


def document_to_movie(doc: Dict[str, Any]) -> Movie:
    data = {k: v for k, v in doc.items() if k != "_id"}
    data["id"] = str(doc["_id"])
    return Movie.model_validate(data)
