"""Bearer credential authentication.

Two credential forms are accepted: session JWTs from the identity provider
and long-lived API tokens minted by the registry (recognised by their
prefix). A credential that does not resolve yields ``None``; only store
failures raise.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import OperationalError

from registry_api.auth.context import ADMIN_ROLE, Identity
from registry_api.auth.identity_provider import decode_session_token
from registry_api.config.settings import get_settings
from registry_api.errors import AuthenticationError, UpstreamError
from registry_api.repo.accounts import ensure_user, get_user
from registry_api.repo.tokens import resolve_token

LOGGER = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def parse_bearer(authorization: Optional[str]) -> str:
    """Extract the credential from an ``Authorization: Bearer`` header."""
    if not authorization:
        raise AuthenticationError("Missing Authorization header.")
    if authorization[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        raise AuthenticationError("Authorization header must use the Bearer scheme.")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token or " " in token:
        raise AuthenticationError("Malformed bearer token.")
    return token


def _roles_for(user_id: str, role_claim: Optional[str] = None) -> tuple[str, ...]:
    roles = []
    if role_claim:
        roles.append(role_claim)
    if get_settings().is_admin_user(user_id) and ADMIN_ROLE not in roles:
        roles.append(ADMIN_ROLE)
    return tuple(roles)


def _identity_from_user(
    user: dict, *, credential: str, roles: tuple[str, ...], token_id: Optional[str] = None
) -> Identity:
    return Identity(
        user_id=user["id"],
        username=user["username"],
        display_name=user.get("displayName"),
        email=user.get("email"),
        avatar_url=user.get("avatarUrl"),
        roles=roles,
        credential=credential,
        token_id=token_id,
    )


def authenticate_api_token(token: str) -> Optional[Identity]:
    try:
        resolved = resolve_token(token)
        if resolved is None:
            LOGGER.debug("API token lookup failed")
            return None
        user = get_user(resolved["userId"])
    except OperationalError as exc:
        LOGGER.exception("Token store unavailable")
        raise UpstreamError("token store unavailable") from exc
    if user is None:
        return None
    return _identity_from_user(
        user,
        credential="api_token",
        roles=_roles_for(user["id"]),
        token_id=resolved["id"],
    )


def authenticate_session(token: str) -> Optional[Identity]:
    claims = decode_session_token(token)
    if claims is None:
        return None
    try:
        user = ensure_user(
            user_id=str(claims["sub"]),
            username=str(claims["username"]),
            email=claims.get("email"),
            display_name=claims.get("display_name"),
            avatar_url=claims.get("avatar_url"),
        )
    except OperationalError as exc:
        LOGGER.exception("User store unavailable")
        raise UpstreamError("user store unavailable") from exc
    return _identity_from_user(
        user,
        credential="session",
        roles=_roles_for(user["id"], claims.get("role")),
    )


def authenticate(token: str) -> Optional[Identity]:
    if token.startswith(get_settings().api_token_prefix):
        return authenticate_api_token(token)
    return authenticate_session(token)


def authenticate_request(
    authorization: Optional[str], session_cookie: Optional[str]
) -> Optional[Identity]:
    """Resolve the caller from the Authorization header, else the session cookie.

    A present but malformed header raises :class:`AuthenticationError`.
    """
    if authorization:
        return authenticate(parse_bearer(authorization))
    if session_cookie:
        return authenticate_session(session_cookie)
    return None
