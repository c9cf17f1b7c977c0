"""
Global middleware and error rendering.
Challenge: One error body shape for every failure; a crashing request must not take the process down.
"""

import logging
import time
import uuid
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inventory_api.core.exceptions import AppError, AuthenticationError, InternalError

logger = logging.getLogger(__name__)


def error_body(status_code: int, message: str, **extra) -> dict:
    body = {
        "error": message,
        "status": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    }
    body.update(extra)
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map domain error kinds to status codes. Internal details are logged, not returned."""
    if isinstance(exc, InternalError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        message = InternalError.default_message
    else:
        message = exc.message
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, message),
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed body/query/path -> 400 (not FastAPI's default 422)."""
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content=error_body(400, f"invalid request: {details}"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


def register_middleware(app: FastAPI) -> None:
    """Attach request logging and the last-resort error boundary."""

    @app.middleware("http")
    async def request_logger(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            error_id = str(uuid.uuid4())
            logger.exception("unhandled error [id=%s] %s %s", error_id, request.method, request.url.path)
            response = JSONResponse(
                status_code=500,
                content=error_body(500, "internal server error", error_id=error_id),
            )
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        level = logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        logger.log(
            level, "%s %s | %d | %.3fs", request.method, request.url.path, response.status_code, elapsed
        )
        return response
