"""HTTP middleware for the catalog API.

Every request is tagged with a correlation ID that is bound into the
structlog context, so the write logs of the catalog service carry the
request they belong to. Exceptions that no handler translated end up as
a 500 in the common error format.
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


# ============================================================================
# Request Context
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind request ID, method and path to the log context.

    The ID comes from the ``X-Request-ID`` header when the client sends
    one, otherwise a UUID4 is generated. It is stored on
    ``request.state`` for the error handlers and echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                _log_request(status_code, (time.perf_counter() - started) * 1000)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _log_request(status_code: int, duration_ms: float) -> None:
    """Log the outcome of a request; server errors as warnings."""
    log = logger.warning if status_code >= 500 else logger.info
    log(
        "Request completed",
        status_code=status_code,
        duration_ms=round(duration_ms, 2),
    )


# ============================================================================
# Unhandled Errors
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Answer untranslated exceptions with 500 ``INTERNAL_ERROR``.

    Catalog errors never get here; they are mapped by the exception
    handlers in ``main``. What remains is store failures such as lost
    connections or constraint violations from concurrent writes.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled exception")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "details": [],
                    "request_id": getattr(request.state, "request_id", None),
                },
            )


def setup_middleware(app: FastAPI) -> None:
    """Install the catalog middleware.

    The last added middleware runs first, so request IDs are bound before
    the error handler logs anything.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
