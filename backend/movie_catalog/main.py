"""
Movie Catalog - Main Application
"""
import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_catalog.api import api_router
from movie_catalog.core.config import settings, validate_settings
from movie_catalog.core.database import Database
from movie_catalog.core.logging import get_logger, log_api_request, setup_logging, with_request_context
from movie_catalog.services import (
    CatalogService,
    CloudinaryMediaStore,
    GeminiAssistant,
    MovieRepository,
    StorageService,
)

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the service handles at startup and close them at shutdown"""
    for problem in validate_settings(settings):
        logger.warning("Configuration problem", problem=problem)

    database = Database.from_settings(settings)
    await database.connect()

    repository = MovieRepository(database.movies)
    await repository.ensure_indexes()

    app.state.database = database
    app.state.catalog = CatalogService(
        repository=repository,
        media_store=CloudinaryMediaStore.from_settings(settings),
        assistant=GeminiAssistant.from_settings(settings),
        storage=StorageService.from_settings(settings),
    )
    logger.info("Application started", version=settings.APP_VERSION, database=settings.safe_mongodb_url)

    yield

    await database.close()
    logger.info("Application stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Movie catalog with hosted images and assistant search",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Tag every log line of a request with an id and log the outcome"""
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        started = time.perf_counter()

        with with_request_context(request_id):
            response = await call_next(request)
            log_api_request(request.method, request.url.path, response.status_code, time.perf_counter() - started)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    app.include_router(api_router)
    return app


app = create_app()


def main() -> None:
    uvicorn.run("movie_catalog.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
