"""
Assistant Search Endpoints
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from movie_catalog.api.deps import get_catalog_service, handle_failures, templates
from movie_catalog.services import CatalogService

router = APIRouter()


@router.get("/gemini", response_class=HTMLResponse)
async def assistant_search(
    request: Request,
    q: str = Query(""),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Ask the language model about the catalog"""

    with handle_failures("Failed to search with Gemini AI"):
        result = await catalog.search_with_assistant(q)

    return templates.TemplateResponse(
        request,
        "assistant.html",
        {"lines": result.lines, "query": result.query},
    )
