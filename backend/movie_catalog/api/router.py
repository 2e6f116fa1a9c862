"""
API Router - Main routing configuration
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, RedirectResponse

from movie_catalog.api.deps import get_database
from movie_catalog.api.endpoints import assistant, movies
from movie_catalog.core.config import settings
from movie_catalog.core.database import Database
from movie_catalog.core.logging import get_logger

logger = get_logger(__name__)

api_router = APIRouter()

# ==========================================
# HOME AND HEALTH
# ==========================================

@api_router.get("/")
async def home():
    return RedirectResponse(url="/movies", status_code=302)


@api_router.get("/health")
async def health_check(database: Optional[Database] = Depends(get_database)):
    """Liveness check including a database ping"""

    if database is None:
        db_status = {"status": "unhealthy", "error": "Database not initialized"}
    else:
        db_status = await database.check_health()

    healthy = db_status.get("status") == "healthy"
    if not healthy:
        logger.warning("Health check degraded", database=db_status)

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "version": settings.APP_VERSION,
            "services": {"database": db_status},
        },
    )

# ==========================================
# INCLUDE ENDPOINT ROUTERS
# ==========================================

api_router.include_router(movies.router, tags=["movies"])
api_router.include_router(assistant.router, tags=["assistant"])
