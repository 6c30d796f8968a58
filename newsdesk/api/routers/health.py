"""
Health Check Endpoints

Liveness and database connectivity checks for the Newsdesk API.
Used by monitoring systems and load balancers.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from newsdesk.api.deps import get_db_handle
from newsdesk.db.connection import DatabaseHandle

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: datetime


class DatabaseHealthResponse(BaseModel):
    """Database connectivity check response."""
    connected: bool
    latency_ms: Optional[float] = None
    error: Optional[str] = None


class FullHealthResponse(BaseModel):
    """Complete system health status."""
    status: str
    timestamp: datetime
    database: DatabaseHealthResponse


def check_database(handle: DatabaseHandle) -> DatabaseHealthResponse:
    """Ping the store; connection errors become connected=False."""
    try:
        latency = handle.ping()
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return DatabaseHealthResponse(connected=False, error=str(e))
    return DatabaseHealthResponse(connected=True, latency_ms=round(latency, 2))


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    Basic health check endpoint.

    Returns 200 OK if the API is running.
    Does not check external dependencies.
    """
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))


@router.get("/health/db", response_model=DatabaseHealthResponse)
def database_health_check(handle: DatabaseHandle = Depends(get_db_handle)):
    """
    Database connectivity check with round-trip latency.
    """
    return check_database(handle)


@router.get("/health/full", response_model=FullHealthResponse)
def full_health_check(handle: DatabaseHandle = Depends(get_db_handle)):
    """
    Complete system health check.

    Returns 'healthy' only if all checks pass.
    """
    db_health = check_database(handle)
    overall_status = "healthy" if db_health.connected else "unhealthy"

    return FullHealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        database=db_health,
    )
