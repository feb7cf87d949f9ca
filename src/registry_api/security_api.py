# coding: utf-8

import re
from typing import Optional

from fastapi import Request

from registry_api.auth.context import Identity, get_current_identity, set_current_identity
from registry_api.auth.service import authenticate_request
from registry_api.config.settings import get_settings
from registry_api.errors import AuthenticationError
from registry_api.models.extra_models import TokenModel

# Read-only routes reachable without a credential.
PUBLIC_ROUTES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("GET", re.compile(r"^/api/v1/stats/?$")),
    ("GET", re.compile(r"^/api/v1/health/?$")),
    ("GET", re.compile(r"^/api/v1/users/[^/]+/?$")),
    ("GET", re.compile(r"^/api/v1/user-by-username/[^/]+/?$")),
    ("GET", re.compile(r"^/api/v1/packages(/.*)?$")),
    ("GET", re.compile(r"^/api/v1/services(/.*)?$")),
)


def is_public_route(method: str, path: str) -> bool:
    method = method.upper()
    if method == "HEAD":
        method = "GET"
    return any(method == allowed and pattern.match(path) for allowed, pattern in PUBLIC_ROUTES)


async def get_token_bearerAuth(request: Request) -> TokenModel:
    """
    Resolve the caller for this request and publish it to the request context.

    Routes on the public allow-list fall back to anonymous access when no
    usable credential is supplied; every other route answers 401.

    :return: Token model describing the resolved subject
    :rtype: TokenModel
    """

    public = is_public_route(request.method, request.url.path)
    authorization = request.headers.get("Authorization")
    cookie_value = request.cookies.get(get_settings().session_cookie_name)

    try:
        identity = authenticate_request(authorization, cookie_value)
    except AuthenticationError:
        if not public:
            raise
        identity = None

    if identity is None and not public:
        raise AuthenticationError("Authentication required.")

    set_current_identity(identity)
    request.state.identity = identity
    if identity is None:
        return TokenModel(sub="")
    return TokenModel(sub=identity.user_id, roles=list(identity.roles), credential=identity.credential)


def get_current_actor() -> Optional[str]:
    identity = get_current_identity()
    return identity.user_id if identity else None


def require_identity() -> Identity:
    identity = get_current_identity()
    if identity is None:
        raise AuthenticationError("Authentication required.")
    return identity


def require_actor() -> str:
    return require_identity().user_id


def is_admin() -> bool:
    identity = get_current_identity()
    return bool(identity and identity.is_admin)
