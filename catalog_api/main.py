"""Catalog API main application module.

This module initializes the FastAPI application and configures
logging, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from catalog_api.api.catalog import router as catalog_router
from catalog_api.api.health import router as health_router
from catalog_api.api.middleware import setup_middleware
from catalog_api.domain.exceptions import CatalogError
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import get_engine
from catalog_api.infrastructure.logging import configure_logging

configure_logging(settings.log_level, json=settings.log_json)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    yield

    logger.info("Shutting down Catalog API")
    if get_engine.cache_info().currsize:
        get_engine().dispose()


app = FastAPI(
    title="Catalog API",
    description="Read-only product, category, and brand catalog",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

setup_middleware(app)

app.include_router(health_router, tags=["Health"])
app.include_router(catalog_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Render catalog failures as 5xx responses.

    Connection failures are 503, every other catalog error is 500.
    """
    request_id = getattr(request.state, "request_id", None)

    logger.error(
        "Catalog query failed",
        path=request.url.path,
        error_code=exc.error_code,
        error=exc.message,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": [
                {"field": field, "message": str(value)}
                for field, value in exc.details.items()
            ],
            "request_id": request_id,
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render routing and HTTP errors (404, 405, ...) in the standard format."""
    request_id = getattr(request.state, "request_id", None)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": HTTPStatus(exc.status_code).name,
            "message": str(exc.detail),
            "details": [],
            "request_id": request_id,
        },
        headers=exc.headers,
    )


def run() -> None:
    """Run the API with uvicorn."""
    uvicorn.run(
        "catalog_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
