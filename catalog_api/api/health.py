"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from catalog_api.domain.exceptions import CatalogError
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import ConnectionProvider, get_connection_provider

logger = structlog.get_logger()

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="catalog-api",
        version=settings.api_version,
    )


@router.get("/ready")
def readiness_check(
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> JSONResponse:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status, 503 when the database cannot be reached.
    """
    try:
        provider.ping()
    except CatalogError as e:
        logger.warning("Readiness check failed", error=e.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready"},
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ready"})
