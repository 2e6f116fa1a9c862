"""
API Dependencies
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from fastapi import HTTPException, Request
from fastapi.templating import Jinja2Templates
from starlette.datastructures import FormData, UploadFile

from movie_catalog.core.database import Database
from movie_catalog.core.exceptions import NotFoundError
from movie_catalog.core.logging import get_logger
from movie_catalog.services import CatalogService

logger = get_logger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

# ==========================================
# SERVICE DEPENDENCIES
# ==========================================

def get_catalog_service(request: Request) -> CatalogService:
    """Catalog service built at startup"""
    return request.app.state.catalog


def get_database(request: Request) -> Optional[Database]:
    return getattr(request.app.state, "database", None)

# ==========================================
# FORM HELPERS
# ==========================================

def form_fields(form: FormData) -> Dict[str, Any]:
    """Text fields of a submitted form"""
    return {key: value for key, value in form.items() if isinstance(value, str)}


def optional_image(value: Any) -> Optional[UploadFile]:
    """The uploaded image, or None when the file input was left empty"""
    if isinstance(value, UploadFile) and value.filename:
        return value
    return None

# ==========================================
# ERROR MAPPING
# ==========================================

@contextmanager
def handle_failures(message: str) -> Iterator[None]:
    """Map operation failures to plain-text HTTP errors.

    NotFoundError becomes 404 "Movie not found"; anything else is logged
    and becomes 500 with the given message.
    """
    try:
        yield
    except HTTPException:
        raise
    except NotFoundError as e:
        logger.info("Movie not found", movie_id=e.movie_id)
        raise HTTPException(status_code=404, detail="Movie not found") from e
    except Exception as e:
        logger.error(message, error=str(e), error_type=type(e).__name__, exc_info=True)
        raise HTTPException(status_code=500, detail=message) from e
