"""
Health check endpoints.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from launchpad_bookings.api.dependencies import get_db_manager
from launchpad_bookings.database import DatabaseManager
from launchpad_bookings.logging_config import get_logger
from launchpad_bookings.models.schemas import HealthResponse

logger = get_logger(__name__, component="health_api")

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse, summary="Health check", description="Check database connectivity")
async def health_check(db_manager: DatabaseManager = Depends(get_db_manager)):
    """Report OK when the database answers."""
    if not db_manager.check_connection():
        logger.info("Service is unhealthy")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )
    return HealthResponse(status="OK")


@router.get("/live", summary="Liveness probe", description="Liveness probe endpoint")
async def liveness_probe():
    """Returns 200 if the application is running, regardless of dependencies."""
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
