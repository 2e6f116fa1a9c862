"""Tests for the HTML routes and their error mapping"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from movie_catalog.api import get_catalog_service
from movie_catalog.core.exceptions import NotFoundError, ServiceError, UploadError, ValidationError
from movie_catalog.main import create_app
from movie_catalog.models import AssistantSearchResult, Movie

MOVIE_ID = "5f1d7f0c8e4b2a6d9c3e1a00"

FORM = {
    "title": "Dune",
    "genre": "Sci-Fi",
    "rating": "8.7",
    "release_year": "2021",
    "description": "A noble family is drawn into a war over a desert planet.",
}


def make_movie(**overrides):
    data = {
        "id": MOVIE_ID,
        "title": "Dune",
        "genre": "Sci-Fi",
        "description": "A noble family is drawn into a war over a desert planet.",
        "rating": 8.7,
        "release_year": 2021,
        "image_url": "https://res.cloudinary.com/demo/image/upload/v1/movies/dune.jpg",
        "media_public_id": "movies/dune",
    }
    data.update(overrides)
    return Movie(**data)


@pytest.fixture
def catalog():
    service = MagicMock()
    service.add_movie = AsyncMock(return_value=make_movie())
    service.list_movies = AsyncMock(return_value=[make_movie()])
    service.get_movie = AsyncMock(return_value=make_movie())
    service.edit_movie = AsyncMock(return_value=make_movie())
    service.delete_movie = AsyncMock(return_value=None)
    service.search_with_assistant = AsyncMock(return_value=AssistantSearchResult())
    return service


@pytest.fixture
def client(catalog):
    app = create_app()
    app.dependency_overrides[get_catalog_service] = lambda: catalog
    return TestClient(app, follow_redirects=False)


class TestNavigation:

    def test_home_redirects_to_list(self, client):
        response = client.get("/")
        assert response.status_code == 302
        assert response.headers["location"] == "/movies"

    def test_add_form(self, client):
        response = client.get("/add")
        assert response.status_code == 200
        assert 'enctype="multipart/form-data"' in response.text

    def test_request_id_echoed(self, client):
        response = client.get("/add", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    def test_health_without_database(self, client):
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestListAndDetail:

    def test_list_renders_movies(self, client, catalog):
        response = client.get("/movies", params={"search": "dun", "genre": "Sci-Fi"})

        assert response.status_code == 200
        assert "Dune" in response.text
        assert "/upload/w_300,h_450,c_fill/v1/movies/dune.jpg" in response.text
        catalog.list_movies.assert_awaited_once_with(search="dun", genre="Sci-Fi")

    def test_list_failure(self, client, catalog):
        catalog.list_movies.side_effect = RuntimeError("database down")
        response = client.get("/movies")
        assert response.status_code == 500
        assert response.text == "Failed to fetch movies."

    def test_detail(self, client):
        response = client.get(f"/movies/{MOVIE_ID}")
        assert response.status_code == 200
        assert "Dune (2021)" in response.text

    def test_detail_not_found(self, client, catalog):
        catalog.get_movie.side_effect = NotFoundError(MOVIE_ID)
        response = client.get(f"/movies/{MOVIE_ID}")
        assert response.status_code == 404
        assert response.text == "Movie not found"

    def test_detail_failure(self, client, catalog):
        catalog.get_movie.side_effect = RuntimeError("database down")
        response = client.get(f"/movies/{MOVIE_ID}")
        assert response.status_code == 500
        assert response.text == "Error loading movie"

    def test_edit_form_prefilled(self, client):
        response = client.get(f"/movies/{MOVIE_ID}/edit")
        assert response.status_code == 200
        assert 'value="Dune"' in response.text

    def test_edit_form_not_found(self, client, catalog):
        catalog.get_movie.side_effect = NotFoundError(MOVIE_ID)
        assert client.get(f"/movies/{MOVIE_ID}/edit").status_code == 404


class TestMutations:

    def test_add_redirects_to_list(self, client, catalog):
        response = client.post("/add", data=FORM, files={"image": ("dune.jpg", b"jpeg bytes", "image/jpeg")})

        assert response.status_code == 302
        assert response.headers["location"] == "/movies"
        form, image = catalog.add_movie.await_args.args
        assert form == FORM
        assert image.filename == "dune.jpg"

    def test_add_without_image_passes_none(self, client, catalog):
        catalog.add_movie.side_effect = ValidationError("An image file is required")
        response = client.post("/add", data=FORM)

        assert response.status_code == 500
        assert response.text == "Failed to upload movie."
        assert catalog.add_movie.await_args.args[1] is None

    def test_add_upload_failure(self, client, catalog):
        catalog.add_movie.side_effect = UploadError("media host down")
        response = client.post("/add", data=FORM, files={"image": ("dune.jpg", b"jpeg", "image/jpeg")})
        assert response.status_code == 500
        assert response.text == "Failed to upload movie."

    def test_edit_redirects_to_detail(self, client, catalog):
        response = client.post(f"/movies/{MOVIE_ID}/edit", data=FORM)

        assert response.status_code == 302
        assert response.headers["location"] == f"/movies/{MOVIE_ID}"
        movie_id, form, image = catalog.edit_movie.await_args.args
        assert movie_id == MOVIE_ID
        assert form == FORM
        assert image is None

    def test_edit_with_empty_file_input_keeps_image(self, client, catalog):
        client.post(f"/movies/{MOVIE_ID}/edit", data=FORM, files={"image": ("", b"", "application/octet-stream")})
        assert catalog.edit_movie.await_args.args[2] is None

    def test_edit_not_found(self, client, catalog):
        catalog.edit_movie.side_effect = NotFoundError(MOVIE_ID)
        response = client.post(f"/movies/{MOVIE_ID}/edit", data=FORM)
        assert response.status_code == 404
        assert response.text == "Movie not found"

    def test_edit_failure(self, client, catalog):
        catalog.edit_movie.side_effect = ValidationError("Invalid movie fields: rating: too big")
        response = client.post(f"/movies/{MOVIE_ID}/edit", data=FORM)
        assert response.status_code == 500
        assert response.text == "Error updating movie"

    def test_delete_redirects_to_list(self, client, catalog):
        response = client.post(f"/movies/{MOVIE_ID}/delete")
        assert response.status_code == 302
        assert response.headers["location"] == "/movies"
        catalog.delete_movie.assert_awaited_once_with(MOVIE_ID)

    def test_delete_not_found(self, client, catalog):
        catalog.delete_movie.side_effect = NotFoundError(MOVIE_ID)
        response = client.post(f"/movies/{MOVIE_ID}/delete")
        assert response.status_code == 404
        assert response.text == "Movie not found"

    def test_delete_failure(self, client, catalog):
        catalog.delete_movie.side_effect = RuntimeError("database down")
        response = client.post(f"/movies/{MOVIE_ID}/delete")
        assert response.status_code == 500
        assert response.text == "Failed to delete movie"


class TestAssistantSearch:

    def test_blank_query_renders_empty(self, client, catalog):
        response = client.get("/gemini")
        assert response.status_code == 200
        assert "<li>" not in response.text
        catalog.search_with_assistant.assert_awaited_once_with("")

    def test_lines_rendered(self, client, catalog):
        catalog.search_with_assistant.return_value = AssistantSearchResult(
            query="space politics",
            lines=["1. Dune - desert politics", "2. Arrival - quiet first contact"],
        )

        response = client.get("/gemini", params={"q": "space politics"})

        assert response.status_code == 200
        assert "<li>1. Dune - desert politics</li>" in response.text
        assert "<li>2. Arrival - quiet first contact</li>" in response.text

    def test_assistant_failure(self, client, catalog):
        catalog.search_with_assistant.side_effect = ServiceError("quota exceeded")
        response = client.get("/gemini", params={"q": "space"})
        assert response.status_code == 500
        assert response.text == "Failed to search with Gemini AI"
