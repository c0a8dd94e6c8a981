"""HTTP middleware: request correlation, timing and response hardening."""
from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from hotel_booking.config.logging import get_logger
from hotel_booking.core.constants import HEADER_PROCESS_TIME, HEADER_REQUEST_ID

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id and log it once it completes.

    An ``X-Request-ID`` sent by the caller is kept, otherwise a new one is
    generated. Both the id and the elapsed time go back as response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers[HEADER_REQUEST_ID] = request_id
        response.headers[HEADER_PROCESS_TIME] = f"{elapsed:.4f}"

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "process_time": round(elapsed, 4),
            },
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """JSON-only API: forbid sniffing and framing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


def register_middlewares(app: FastAPI) -> None:
    # Added last runs first, so the request id exists before anything logs.
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
    "register_middlewares",
    "get_request_id",
]
