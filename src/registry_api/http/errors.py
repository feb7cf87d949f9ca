"""Error envelope and exception handlers for the registry HTTP API."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from registry_api.errors import RegistryError, UpstreamError
from registry_api.models.error import Error

LOGGER = logging.getLogger(__name__)

_STATUS_ERROR_CODES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: "payload_too_large",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "internal_error",
}


def error_payload(
    message: str,
    *,
    error: Optional[str] = None,
    status_code: Optional[int] = None,
    details: Optional[dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> dict[str, Any]:
    resolved_error = error or _STATUS_ERROR_CODES.get(status_code or 0, "error")
    return Error(
        error=resolved_error,
        message=message,
        request_id=request_id,
        details=jsonable_encoder(details) if details else None,
    ).model_dump(by_alias=True, exclude_none=True)


def error_response(
    status_code: int,
    message: str,
    *,
    error: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_payload(message, error=error, status_code=status_code, details=details),
        headers=headers,
    )


def _validation_issues(exc: RequestValidationError) -> list[dict[str, Any]]:
    issues = []
    for item in exc.errors():
        location = [str(part) for part in item.get("loc", ()) if part != "body"]
        issues.append(
            {
                "path": ".".join(location),
                "message": item.get("msg", "Invalid value"),
                "code": item.get("type", "invalid"),
            }
        )
    return issues


async def _registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        LOGGER.error(
            "Upstream failure on %s %s: %s", request.method, request.url.path, exc.message,
            exc_info=exc,
        )
        return error_response(exc.status_code, exc.public_message, error=exc.error)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return error_response(
        exc.status_code,
        exc.message,
        error=exc.error,
        details=exc.details,
        headers=headers,
    )


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request.",
        details={"issues": _validation_issues(exc)},
    )


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UpstreamError.public_message)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistryError, _registry_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)


__all__ = [
    "error_payload",
    "error_response",
    "install_exception_handlers",
]
