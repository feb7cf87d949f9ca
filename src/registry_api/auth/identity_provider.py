"""Session credentials issued by the identity provider.

Sessions are HS256 JWTs signed with the shared ``session_secret``. The
registry only verifies them; :func:`issue_session_token` exists for the
development identity provider and for tests.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import uuid4

import jwt

from registry_api.config.settings import get_settings

LOGGER = logging.getLogger(__name__)


def issue_session_token(
    *,
    user_id: str,
    username: str,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
    avatar_url: Optional[str] = None,
    role: Optional[str] = None,
    ttl_seconds: Optional[int] = None,
) -> tuple[str, int]:
    settings = get_settings()
    expires_in = ttl_seconds or settings.session_token_ttl_seconds
    payload: dict[str, Any] = {
        "sub": user_id,
        "username": username,
        "email": email,
        "display_name": display_name,
        "avatar_url": avatar_url,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        "jti": str(uuid4()),
    }
    if role:
        payload["role"] = role
    token = jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)
    return token, expires_in


def decode_session_token(token: str) -> Optional[dict[str, Any]]:
    """Return verified claims, or ``None`` for an invalid or expired session."""
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.session_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as exc:
        LOGGER.debug("Rejected session token: %s", exc)
        return None
    if not claims.get("sub") or not claims.get("username"):
        LOGGER.debug("Rejected session token without subject/username")
        return None
    return claims
