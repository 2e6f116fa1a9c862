"""
Assistant Service - Natural-language movie search backed by Gemini
"""

from typing import Iterable, List, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors

from movie_catalog.core.config import Settings
from movie_catalog.core.exceptions import ServiceError
from movie_catalog.core.logging import get_logger
from movie_catalog.models import Movie

logger = get_logger(__name__)

PROMPT_TEMPLATE = """
You are a helpful AI movie assistant.

User query: "{query}"

Here is a list of all available movies:
{movie_list}

If relevant movies match the user query, list up to 5 of them with short reasons.

If nothing matches directly, provide interesting recommendations, trivia, or suggestions based on the user query.
"""


def format_movie_line(movie: Movie) -> str:
    return (
        f"Title: {movie.title}, Genre: {movie.genre}, Rating: {movie.rating:g}, "
        f"Year: {movie.release_year}, Description: {movie.description}"
    )


def build_corpus(movies: Iterable[Movie]) -> str:
    return "\n".join(format_movie_line(movie) for movie in movies)


def build_prompt(query: str, movies: Iterable[Movie]) -> str:
    return PROMPT_TEMPLATE.format(query=query, movie_list=build_corpus(movies))


def split_response_lines(text: Optional[str]) -> List[str]:
    """Non-empty lines of the model's answer, for display only"""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


class GeminiAssistant:
    """Sends a query plus the catalog summary to Gemini and returns its text"""

    def __init__(self, api_key: Optional[str], model: str, client: Optional[genai.Client] = None):
        self.model = model
        self._api_key = api_key
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiAssistant":
        return cls(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)

    @property
    def client(self) -> genai.Client:
        # Built on first use so the app starts without a key
        if self._client is None:
            if not self._api_key:
                raise ServiceError("GEMINI_API_KEY is not set; assistant search is unavailable")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def query(self, text: str, movies: Iterable[Movie]) -> str:
        prompt = build_prompt(text, movies)
        logger.debug("Assistant prompt built", prompt_chars=len(prompt))

        try:
            response = await self.client.aio.models.generate_content(model=self.model, contents=prompt)
        except (genai_errors.APIError, httpx.HTTPError) as e:
            logger.error("Assistant request failed", model=self.model, error=str(e))
            raise ServiceError(f"Assistant request failed: {e}", original_error=e) from e

        return response.text or ""
