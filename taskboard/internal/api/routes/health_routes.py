"""
Health Check API Routes.
"""

from fastapi import APIRouter, Request

from taskboard.domain.entities import utc_now
from taskboard.internal.api.schemas.common_schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check service health and storage connectivity",
)
async def health(request: Request):
    """
    Health check endpoint.

    ``database`` is "n/a" when the app runs on an injected repository
    without a database manager (tests).
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        database_status = "n/a"
    else:
        database_status = "connected" if await database.health_check() else "disconnected"

    return {"status": "ok", "time": utc_now().isoformat(), "database": database_status}


def create_health_routes() -> APIRouter:
    return router
