"""Shared fixtures for the movie catalog tests"""
import io
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from starlette.datastructures import UploadFile

from movie_catalog.core.exceptions import NotFoundError
from movie_catalog.models import (
    Movie,
    validate_movie,
    validate_movie_fields,
    validate_movie_image,
)
from movie_catalog.services import CatalogService, MediaUpload, StorageService


class InMemoryMovieRepository:
    """Dict-backed record store with the same validation as MovieRepository"""

    def __init__(self):
        self.records: Dict[str, Movie] = {}
        self.create_error: Optional[Exception] = None

    async def create(self, fields: Mapping[str, Any]) -> Movie:
        if self.create_error is not None:
            raise self.create_error
        data = validate_movie(fields).model_dump()
        now = datetime.now(timezone.utc)
        movie = Movie(id=str(ObjectId()), created_at=now, updated_at=now, **data)
        self.records[movie.id] = movie
        return movie

    async def find_all(self, search: Optional[str] = None, genre: Optional[str] = None) -> List[Movie]:
        movies = list(self.records.values())
        if search:
            movies = [m for m in movies if search.lower() in m.title.lower()]
        if genre:
            movies = [m for m in movies if m.genre == genre]
        return sorted(movies, key=lambda m: m.rating, reverse=True)

    async def find_by_id(self, movie_id: str) -> Movie:
        if movie_id not in self.records:
            raise NotFoundError(movie_id)
        return self.records[movie_id]

    async def update(self, movie_id: str, fields: Mapping[str, Any]) -> Movie:
        current = await self.find_by_id(movie_id)
        updates = validate_movie_fields(fields).model_dump()
        if "image_url" in fields or "media_public_id" in fields:
            updates.update(validate_movie_image(fields).model_dump())
        movie = current.model_copy(update={**updates, "updated_at": datetime.now(timezone.utc)})
        self.records[movie_id] = movie
        return movie

    async def delete(self, movie_id: str) -> None:
        if self.records.pop(movie_id, None) is None:
            raise NotFoundError(movie_id)


def make_upload(filename: str = "dune.jpg", content: bytes = b"\xff\xd8\xff fake jpeg") -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=filename)


@pytest.fixture
def movie_form() -> Dict[str, str]:
    """Form fields as the browser submits them"""
    return {
        "title": "Dune",
        "genre": "Sci-Fi",
        "rating": "8.7",
        "release_year": "2021",
        "description": "A noble family is drawn into a war over a desert planet.",
    }


@pytest.fixture
def repository() -> InMemoryMovieRepository:
    return InMemoryMovieRepository()


@pytest.fixture
def media_store() -> MagicMock:
    store = MagicMock()
    store.upload = AsyncMock(return_value=MediaUpload(
        public_url="https://res.cloudinary.com/demo/image/upload/v1/movies/dune.jpg",
        public_id="movies/dune",
    ))
    store.delete = AsyncMock(return_value=None)
    return store


@pytest.fixture
def assistant() -> MagicMock:
    mock = MagicMock()
    mock.query = AsyncMock(return_value="1. Dune - desert politics\n\n2. Arrival - quiet first contact\n")
    return mock


@pytest.fixture
def storage(tmp_path) -> StorageService:
    return StorageService(upload_dir=tmp_path / "uploads", allowed_types=["jpg", "jpeg", "png"], max_size=1024 * 1024)


@pytest.fixture
def catalog(repository, media_store, assistant, storage) -> CatalogService:
    return CatalogService(
        repository=repository,
        media_store=media_store,
        assistant=assistant,
        storage=storage,
    )
