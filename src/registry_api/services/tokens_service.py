from __future__ import annotations

import logging
from datetime import timezone
from typing import Optional

from registry_api.config.settings import get_settings
from registry_api.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from registry_api.models.api_token import ApiToken
from registry_api.models.api_token_create_request import ApiTokenCreateRequest
from registry_api.models.api_token_list import ApiTokenList
from registry_api.repo.common import _now
from registry_api.repo.tokens import create_token, list_tokens, revoke_token
from registry_api.security_api import require_actor
from registry_api.services import permissions

LOGGER = logging.getLogger(__name__)


def _target_user(user_id: Optional[str]) -> str:
    """The caller, or ``user_id`` when it names the caller."""
    actor_id = require_actor()
    if user_id is None:
        return actor_id
    if not permissions.can_manage_tokens(user_id, actor_id):
        raise AuthorizationError("You can only manage your own API tokens.")
    return actor_id


class TokensService:
    async def list_tokens(self, user_id: Optional[str] = None) -> ApiTokenList:
        owner_id = _target_user(user_id)
        items = [ApiToken.from_dict(record) for record in list_tokens(owner_id)]
        return ApiTokenList(items=items)

    async def create_token(
        self,
        request: ApiTokenCreateRequest,
        user_id: Optional[str] = None,
    ) -> ApiToken:
        owner_id = _target_user(user_id)
        if request is None:
            raise ValidationError("Payload is required.")
        name = request.name.strip()
        if not name:
            raise ValidationError(
                "Token name is required.",
                issues=[{"path": "name", "message": "Required."}],
            )
        expires_at = request.expires_at
        if expires_at is not None:
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=timezone.utc)
            if expires_at <= _now():
                raise ValidationError(
                    "Expiry must be in the future.",
                    issues=[{"path": "expiresAt", "message": "Must be in the future."}],
                )
        try:
            record, plaintext = create_token(
                user_id=owner_id,
                name=name,
                expires_at=expires_at,
                prefix=get_settings().api_token_prefix,
            )
        except ValueError as exc:
            if str(exc) == "token_name_exists":
                raise ConflictError(f"A token named '{name}' already exists.") from exc
            raise
        LOGGER.info("API token %s (%s) created for %s", record["id"], name, owner_id)
        return ApiToken.from_dict({**record, "token": plaintext})

    async def revoke_token(self, token_id: str, user_id: Optional[str] = None) -> None:
        owner_id = _target_user(user_id)
        try:
            revoke_token(token_id, owner_id)
        except ValueError as exc:
            # another user's token is reported as missing
            raise NotFoundError(f"Token '{token_id}' not found.") from exc
        LOGGER.info("API token %s revoked by %s", token_id, owner_id)
        return None
