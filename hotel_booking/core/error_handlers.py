"""
Exception handlers that render every failure in the standard API envelope:

    {"success": false, "message": ..., "error_code": ..., "details": {...}}
"""
from __future__ import annotations

from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotel_booking.config.logging import get_logger
from hotel_booking.core.exceptions import BaseAppException, ErrorCode, ValidationError
from hotel_booking.core.middleware import get_request_id

logger = get_logger(__name__)

# Leading loc segments FastAPI adds that say where, not which field
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def _field_errors_from_request(exc: RequestValidationError) -> Dict[str, List[str]]:
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(loc) or "request"
        field_errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return field_errors


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "request_id": get_request_id(request),
            "path": request.url.path,
            "error_code": exc.error_code.value,
            "status_code": exc.status_code,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError("Validation failed", _field_errors_from_request(exc))
    return await app_exception_handler(request, error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error: {exc}",
        extra={
            "request_id": get_request_id(request),
            "path": request.url.path,
            "error_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "error_code": ErrorCode.INTERNAL_ERROR.value,
            "details": {},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
