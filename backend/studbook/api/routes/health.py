"""Health routes — liveness and database readiness."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from studbook.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "studbook-api"}


@router.get("/ready")
async def readiness_check():
    """503 until the database answers; the engine needs it for every operation."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready"}
