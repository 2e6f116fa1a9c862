"""
Catalog Service - Orchestrates records, hosted images and assistant search
"""

from typing import Any, List, Mapping, Optional

from movie_catalog.core.exceptions import UploadError, ValidationError
from movie_catalog.core.logging import get_logger
from movie_catalog.models import AssistantSearchResult, Movie, validate_movie_fields
from movie_catalog.services.data.movie_repository import MovieRepository
from movie_catalog.services.external.assistant_service import GeminiAssistant, split_response_lines
from movie_catalog.services.external.media_store import CloudinaryMediaStore, MediaUpload
from movie_catalog.services.external.storage_service import StorageService, UploadedFile

logger = get_logger(__name__)


class CatalogService:
    """Service for movie catalog business logic"""

    def __init__(
        self,
        repository: MovieRepository,
        media_store: CloudinaryMediaStore,
        assistant: GeminiAssistant,
        storage: StorageService,
    ):
        self.repository = repository
        self.media_store = media_store
        self.assistant = assistant
        self.storage = storage

    async def _upload_image(self, image: UploadedFile) -> MediaUpload:
        async with self.storage.temp_file(image) as path:
            return await self.media_store.upload(path)

    async def add_movie(self, form: Mapping[str, Any], image: Optional[UploadedFile]) -> Movie:
        """Upload the image, then create the record"""

        if image is None:
            raise ValidationError("An image file is required")

        # Reject bad input before anything reaches the media host
        fields = validate_movie_fields(form)
        uploaded = await self._upload_image(image)

        try:
            movie = await self.repository.create({
                **fields.model_dump(),
                "image_url": uploaded.public_url,
                "media_public_id": uploaded.public_id,
            })
        except Exception:
            # Compensate so the uploaded image is not orphaned
            try:
                await self.media_store.delete(uploaded.public_id)
            except UploadError as e:
                logger.warning("Orphaned image after failed create", public_id=uploaded.public_id, error=str(e))
            raise

        return movie

    async def list_movies(self, search: Optional[str] = None, genre: Optional[str] = None) -> List[Movie]:
        return await self.repository.find_all(search=search or None, genre=genre or None)

    async def get_movie(self, movie_id: str) -> Movie:
        return await self.repository.find_by_id(movie_id)

    async def edit_movie(
        self,
        movie_id: str,
        form: Mapping[str, Any],
        image: Optional[UploadedFile] = None,
    ) -> Movie:
        """Update the scalar fields, replacing the image when a new one is given"""

        movie = await self.repository.find_by_id(movie_id)
        updates = validate_movie_fields(form).model_dump()

        if image is not None:
            # Old image goes first; a failure here aborts the edit
            if movie.media_public_id:
                await self.media_store.delete(movie.media_public_id)

            uploaded = await self._upload_image(image)
            updates["image_url"] = uploaded.public_url
            updates["media_public_id"] = uploaded.public_id

        return await self.repository.update(movie_id, updates)

    async def delete_movie(self, movie_id: str) -> None:
        """Delete the hosted image (best-effort), then the record"""

        movie = await self.repository.find_by_id(movie_id)

        if movie.media_public_id:
            try:
                await self.media_store.delete(movie.media_public_id)
            except UploadError as e:
                logger.warning(
                    "Image delete failed; deleting record anyway",
                    movie_id=movie_id,
                    public_id=movie.media_public_id,
                    error=str(e),
                )

        await self.repository.delete(movie_id)

    async def search_with_assistant(self, query: Optional[str]) -> AssistantSearchResult:
        """Ask the assistant about the whole catalog"""

        query = (query or "").strip()
        if not query:
            return AssistantSearchResult()

        movies = await self.repository.find_all()
        text = await self.assistant.query(query, movies)

        lines = split_response_lines(text)
        logger.info("Assistant search completed", query=query, lines=len(lines), corpus_size=len(movies))
        return AssistantSearchResult(query=query, lines=lines)
