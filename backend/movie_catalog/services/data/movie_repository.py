"""
Movie Repository - Persistence for movie records
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from movie_catalog.core.exceptions import NotFoundError
from movie_catalog.core.logging import get_logger
from movie_catalog.models import (
    MOVIE_INDEXES,
    Movie,
    document_to_movie,
    movie_to_document,
    parse_object_id,
    validate_movie,
    validate_movie_fields,
    validate_movie_image,
)

logger = get_logger(__name__)

IMAGE_FIELDS = ("image_url", "media_public_id")


def build_movie_filter(search: Optional[str] = None, genre: Optional[str] = None) -> Dict[str, Any]:
    """Case-insensitive title substring match and exact genre match"""
    query: Dict[str, Any] = {}
    if search:
        query["title"] = {"$regex": re.escape(search), "$options": "i"}
    if genre:
        query["genre"] = genre
    return query


class MovieRepository:
    """Record store over the movies collection"""

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    async def ensure_indexes(self) -> None:
        for keys, name in MOVIE_INDEXES:
            await self.collection.create_index(keys, name=name)
        logger.info("Movie indexes ensured", count=len(MOVIE_INDEXES))

    async def create(self, fields: Mapping[str, Any]) -> Movie:
        """Validate and insert a new movie"""

        movie = validate_movie(fields)
        now = datetime.now(timezone.utc)
        doc = movie_to_document(movie)
        doc["created_at"] = now
        doc["updated_at"] = now

        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info("Created movie", movie_id=str(result.inserted_id), title=movie.title)
        return document_to_movie(doc)

    async def find_all(self, search: Optional[str] = None, genre: Optional[str] = None) -> List[Movie]:
        """Movies matching the filters, highest rated first"""

        query = build_movie_filter(search, genre)
        cursor = self.collection.find(query).sort("rating", DESCENDING)
        docs = await cursor.to_list()
        return [document_to_movie(doc) for doc in docs]

    async def find_by_id(self, movie_id: str) -> Movie:
        object_id = parse_object_id(movie_id)
        if object_id is None:
            raise NotFoundError(movie_id)

        doc = await self.collection.find_one({"_id": object_id})
        if doc is None:
            raise NotFoundError(movie_id)
        return document_to_movie(doc)

    async def update(self, movie_id: str, fields: Mapping[str, Any]) -> Movie:
        """Update the scalar fields, and the image fields when given"""

        object_id = parse_object_id(movie_id)
        if object_id is None:
            raise NotFoundError(movie_id)

        updates = validate_movie_fields(fields).model_dump()
        if any(name in fields for name in IMAGE_FIELDS):
            updates.update(validate_movie_image(fields).model_dump())
        updates["updated_at"] = datetime.now(timezone.utc)

        doc = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError(movie_id)

        logger.info("Updated movie", movie_id=movie_id)
        return document_to_movie(doc)

    async def delete(self, movie_id: str) -> None:
        object_id = parse_object_id(movie_id)
        if object_id is None:
            raise NotFoundError(movie_id)

        result = await self.collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise NotFoundError(movie_id)

        logger.info("Deleted movie", movie_id=movie_id)
