"""
Request context, error mapping and error responses for the analysis API.

Every request gets a request id bound into the structlog context, so the
analysis events logged while serving it carry the same id as the access
log lines. Errors reach the client as ``{"success": false, "error",
"detail"}`` bodies.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from ..errors import (
    AnalysisError,
    DocInsightError,
    EmptyDocumentError,
    ProviderError,
    TemplateNotFoundError,
)

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def error_status(error: Exception) -> int:
    """
    HTTP status for an analysis failure.

    AnalysisError wraps the failing cause, which decides the status:
    - TemplateNotFoundError -> 404
    - EmptyDocumentError -> 422
    - ProviderError -> 502
    - ValueError (missing API key, unknown provider) -> 400
    - anything else -> 500
    """
    cause = error.__cause__ if isinstance(error, AnalysisError) and error.__cause__ else error
    if isinstance(cause, TemplateNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(cause, EmptyDocumentError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(cause, ProviderError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(cause, ValueError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(error: str, detail: str) -> dict:
    return {"success": False, "error": error, "detail": detail}


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def setup_request_middleware(app: FastAPI) -> None:
    """
    Per-request id, timing and access logging.

    Unhandled exceptions become a JSON 500; the exception text is only
    exposed when the app runs in debug mode. The response always carries
    X-Request-ID and X-Process-Time headers.
    """

    @app.middleware("http")
    async def track_request(request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.bind_contextvars(request_id=request_id)
        log = logger.bind(method=request.method, path=request.url.path)

        log.info("request_started", client=request.client.host if request.client else None)
        try:
            response = await call_next(request)
        except Exception as e:
            log.error("request_failed", process_time_ms=_elapsed_ms(started), error=str(e), exc_info=True)
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body(
                    "Internal server error",
                    str(e) if app.debug else "An unexpected error occurred",
                ),
            )
        else:
            log.info(
                "request_completed",
                status_code=response.status_code,
                process_time_ms=_elapsed_ms(started),
            )
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Process-Time"] = str(_elapsed_ms(started) / 1000)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def register_error_handlers(app: FastAPI) -> None:
    """Map DocInsightError raised outside the route-level handling to JSON errors."""

    @app.exception_handler(DocInsightError)
    async def handle_doc_insight_error(request: Request, exc: DocInsightError) -> JSONResponse:
        status_code = error_status(exc)
        logger.warning(
            "doc_insight_error",
            path=request.url.path,
            status_code=status_code,
            **exc.to_dict(),
        )
        return JSONResponse(
            status_code=status_code,
            content=error_body(type(exc).__name__, exc.message),
        )
