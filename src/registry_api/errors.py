"""Domain errors raised by the registry services."""

from __future__ import annotations

from typing import Any, Optional


class RegistryError(Exception):
    status_code: int = 500
    error: str = "error"

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(RegistryError):
    """Malformed or out-of-range input."""

    status_code = 400
    error = "bad_request"

    def __init__(
        self,
        message: str,
        *,
        issues: Optional[list[dict[str, Any]]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        merged = dict(details or {})
        if issues:
            merged["issues"] = issues
        super().__init__(message, details=merged or None)
        self.issues = issues or []


class AuthenticationError(RegistryError):
    status_code = 401
    error = "unauthorized"


class AuthorizationError(RegistryError):
    status_code = 403
    error = "forbidden"


class NotFoundError(RegistryError):
    status_code = 404
    error = "not_found"


class ConflictError(RegistryError):
    status_code = 409
    error = "conflict"


class UpstreamError(RegistryError):
    """Storage or network failure; the message is never shown to clients."""

    status_code = 500
    error = "internal_error"
    public_message = "Internal server error"


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "RegistryError",
    "UpstreamError",
    "ValidationError",
]
