from __future__ import annotations

from registry_api.apis.tokens_api_base import BaseTokensApi
from registry_api.models.api_token import ApiToken
from registry_api.models.api_token_create_request import ApiTokenCreateRequest
from registry_api.models.api_token_list import ApiTokenList
from registry_api.services.tokens_service import TokensService

_service = TokensService()


class TokensApiImpl(BaseTokensApi):
    async def list_tokens(
        self,
        user_id: str | None = None,
    ) -> ApiTokenList:
        return await _service.list_tokens(user_id)

    async def create_token(
        self,
        api_token_create_request: ApiTokenCreateRequest,
        user_id: str | None = None,
    ) -> ApiToken:
        return await _service.create_token(api_token_create_request, user_id)

    async def revoke_token(
        self,
        token_id: str,
        user_id: str | None = None,
    ) -> None:
        return await _service.revoke_token(token_id, user_id)
