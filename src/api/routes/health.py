"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import ping

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(request: Request):
    """Health check endpoint with MongoDB status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        mongodb = {"status": "unhealthy", "message": "Connection failed or not configured"}
    elif ping(client):
        mongodb = {"status": "healthy", "message": "Connection successful"}
    else:
        mongodb = {"status": "unhealthy", "message": "Ping failed"}
    health_status["services"]["mongodb"] = mongodb

    overall_healthy = mongodb["status"] == "healthy"
    if not overall_healthy:
        health_status["status"] = "degraded"

    return JSONResponse(
        content=health_status,
        status_code=status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
