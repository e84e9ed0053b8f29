"""API middleware for the Catalog API.

One middleware wraps every request: it tags the request with a
correlation ID, logs the outcome, and turns exceptions that escaped the
exception handlers into the standard error body.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def internal_error_response(request_id: str | None) -> JSONResponse:
    """Build the generic 500 body used for unexpected failures."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
            "details": [],
            "request_id": request_id,
        },
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlation, access logging, and last-resort error handling.

    The request ID is taken from the ``X-Request-ID`` header when the
    client sends one, generated otherwise. It is stored on
    ``request.state``, bound to the structlog context for the duration
    of the request, and echoed back in the response header.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Run the request inside its logging context.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Handler response, or a 500 error response.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            response = internal_error_response(request_id)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        logger.info(
            "Request completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            query=request.url.query,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install the request middleware on the application.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(RequestContextMiddleware)
