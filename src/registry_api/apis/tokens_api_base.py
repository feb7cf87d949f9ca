# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401

from pydantic import StrictStr
from typing import Optional
from registry_api.models.api_token import ApiToken
from registry_api.models.api_token_create_request import ApiTokenCreateRequest
from registry_api.models.api_token_list import ApiTokenList


class BaseTokensApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BaseTokensApi.subclasses = BaseTokensApi.subclasses + (cls,)
    async def list_tokens(
        self,
        user_id: Optional[StrictStr] = None,
    ) -> ApiTokenList:
        ...


    async def create_token(
        self,
        api_token_create_request: ApiTokenCreateRequest,
        user_id: Optional[StrictStr] = None,
    ) -> ApiToken:
        ...


    async def revoke_token(
        self,
        token_id: StrictStr,
        user_id: Optional[StrictStr] = None,
    ) -> None:
        ...
