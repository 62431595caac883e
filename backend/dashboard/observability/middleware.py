from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, status as http
from fastapi.responses import JSONResponse

from dashboard.schemas.common import fail, meta_now

from .metrics import record_latency, REQUEST_COUNTER, REQUEST_LATENCY

logger = structlog.get_logger("http")

REQUEST_ID_HEADER = "X-Request-Id"


async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.perf_counter()
    context = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
    }
    region = request.query_params.get("state")
    if region:
        context["region"] = region.upper()
    structlog.contextvars.bind_contextvars(**context)
    try:
        response = await call_next(request)
    except Exception:
        duration = (time.perf_counter() - start) * 1000
        _record(request, duration, "500")
        logger.exception("request.error", status_code=500, duration_ms=round(duration, 2))
        structlog.contextvars.clear_contextvars()
        raise

    duration = (time.perf_counter() - start) * 1000
    _record(request, duration, str(response.status_code))
    logger.info("request.completed", status_code=response.status_code, duration_ms=round(duration, 2))
    response.headers[REQUEST_ID_HEADER] = request_id
    structlog.contextvars.clear_contextvars()
    return response


def _record(request: Request, duration_ms: float, status: str) -> None:
    path = request.url.path
    record_latency(path, duration_ms)
    REQUEST_COUNTER.labels(path=path, method=request.method, status=status).inc()
    REQUEST_LATENCY.labels(path=path, method=request.method).observe(duration_ms / 1000)


def register_request_middleware(app: FastAPI) -> None:
    app.middleware("http")(request_context_middleware)


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: an INTERNAL_ERROR envelope that echoes the request id."""
    request_id = getattr(request.state, "request_id", None)
    logger.exception("request.unhandled_exception", exc_type=type(exc).__name__, error=str(exc))
    details = {"request_id": request_id} if request_id else None
    response = fail(
        code="INTERNAL_ERROR",
        message="Internal Server Error",
        status_code=http.HTTP_500_INTERNAL_SERVER_ERROR,
        details=details,
        meta=meta_now(),
    )
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response
