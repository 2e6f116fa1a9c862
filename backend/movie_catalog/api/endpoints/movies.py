"""
Movie Endpoints
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from movie_catalog.api.deps import (
    form_fields,
    get_catalog_service,
    handle_failures,
    optional_image,
    templates,
)
from movie_catalog.services import CatalogService

router = APIRouter()


@router.get("/add", response_class=HTMLResponse)
async def show_add_form(request: Request):
    """Render the add-movie form"""
    return templates.TemplateResponse(request, "add.html")


@router.post("/add")
async def add_movie(request: Request, catalog: CatalogService = Depends(get_catalog_service)):
    """Create a movie from a multipart form with an `image` file"""

    with handle_failures("Failed to upload movie."):
        async with request.form() as form:
            await catalog.add_movie(form_fields(form), optional_image(form.get("image")))

    return RedirectResponse(url="/movies", status_code=302)


@router.get("/movies", response_class=HTMLResponse)
async def list_movies(
    request: Request,
    search: str = "",
    genre: str = "",
    catalog: CatalogService = Depends(get_catalog_service),
):
    """List movies, optionally filtered by title substring and genre"""

    with handle_failures("Failed to fetch movies."):
        movies = await catalog.list_movies(search=search, genre=genre)

    return templates.TemplateResponse(
        request,
        "index.html",
        {"movies": movies, "search_term": search, "selected_genre": genre},
    )


@router.get("/movies/{movie_id}", response_class=HTMLResponse)
async def movie_detail(request: Request, movie_id: str, catalog: CatalogService = Depends(get_catalog_service)):
    with handle_failures("Error loading movie"):
        movie = await catalog.get_movie(movie_id)

    return templates.TemplateResponse(request, "movie_detail.html", {"movie": movie})


@router.get("/movies/{movie_id}/edit", response_class=HTMLResponse)
async def show_edit_form(request: Request, movie_id: str, catalog: CatalogService = Depends(get_catalog_service)):
    with handle_failures("Error fetching movie to edit"):
        movie = await catalog.get_movie(movie_id)

    return templates.TemplateResponse(request, "edit_movie.html", {"movie": movie})


@router.post("/movies/{movie_id}/edit")
async def edit_movie(request: Request, movie_id: str, catalog: CatalogService = Depends(get_catalog_service)):
    """Update a movie; the `image` file is optional"""

    with handle_failures("Error updating movie"):
        async with request.form() as form:
            movie = await catalog.edit_movie(movie_id, form_fields(form), optional_image(form.get("image")))

    return RedirectResponse(url=f"/movies/{movie.id}", status_code=302)


@router.post("/movies/{movie_id}/delete")
async def delete_movie(movie_id: str, catalog: CatalogService = Depends(get_catalog_service)):
    with handle_failures("Failed to delete movie"):
        await catalog.delete_movie(movie_id)

    return RedirectResponse(url="/movies", status_code=302)
