"""
Seed the database with sample movies for development

The images are externally hosted, so the records carry no deletion handle.
"""
import asyncio

from movie_catalog.core.config import settings
from movie_catalog.core.database import Database
from movie_catalog.core.logging import get_logger, setup_logging
from movie_catalog.services import MovieRepository

logger = get_logger(__name__)

SAMPLE_MOVIES = [
    {
        "title": "The Shawshank Redemption",
        "genre": "Drama",
        "description": "Two imprisoned men bond over a number of years, finding solace and eventual redemption through acts of common decency.",
        "rating": 9.3,
        "release_year": 1994,
        "image_url": "https://res.cloudinary.com/demo/image/upload/sample.jpg",
    },
    {
        "title": "The Godfather",
        "genre": "Crime",
        "description": "The aging patriarch of an organized crime dynasty transfers control of his clandestine empire to his reluctant son.",
        "rating": 9.2,
        "release_year": 1972,
        "image_url": "https://res.cloudinary.com/demo/image/upload/sample.jpg",
    },
    {
        "title": "Dune",
        "genre": "Sci-Fi",
        "description": "A noble family becomes embroiled in a war for control over the galaxy's most valuable asset.",
        "rating": 8.0,
        "release_year": 2021,
        "image_url": "https://res.cloudinary.com/demo/image/upload/sample.jpg",
    },
]


async def seed_data():
    """Add sample data to the database"""
    database = Database.from_settings(settings)
    await database.connect()
    try:
        repository = MovieRepository(database.movies)
        await repository.ensure_indexes()
        for fields in SAMPLE_MOVIES:
            await repository.create(fields)
        logger.info("Sample data added", count=len(SAMPLE_MOVIES))
    finally:
        await database.close()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed_data())
