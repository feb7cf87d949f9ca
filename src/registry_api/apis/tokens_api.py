# coding: utf-8

from typing import Dict, List, Any  # noqa: F401
import importlib
import pkgutil

from registry_api.apis.tokens_api_base import BaseTokensApi
import registry_api.impl

from fastapi import (  # noqa: F401
    APIRouter,
    Body,
    Cookie,
    Depends,
    Form,
    Header,
    HTTPException,
    Path,
    Query,
    Response,
    Security,
    status,
)

from registry_api.models.extra_models import TokenModel  # noqa: F401
from pydantic import StrictStr
from registry_api.models.api_token import ApiToken
from registry_api.models.api_token_create_request import ApiTokenCreateRequest
from registry_api.models.api_token_list import ApiTokenList
from registry_api.models.error import Error
from registry_api.security_api import get_token_bearerAuth

router = APIRouter()

ns_pkg = registry_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


@router.get(
    "/api/v1/tokens",
    responses={
        200: {"model": ApiTokenList, "description": "OK"},
        401: {"model": Error, "description": "Unauthorized"},
    },
    tags=["Tokens"],
    summary="List API tokens",
    response_model_by_alias=True,
)
async def list_tokens(
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> ApiTokenList:
    if not BaseTokensApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseTokensApi.subclasses[0]().list_tokens()


@router.post(
    "/api/v1/tokens",
    status_code=201,
    responses={
        201: {"model": ApiToken, "description": "Created"},
        400: {"model": Error, "description": "Invalid input"},
        401: {"model": Error, "description": "Unauthorized"},
        409: {"model": Error, "description": "Conflict"},
    },
    tags=["Tokens"],
    summary="Create API token",
    response_model_by_alias=True,
)
async def create_token(
    api_token_create_request: ApiTokenCreateRequest = Body(None, description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> ApiToken:
    if not BaseTokensApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseTokensApi.subclasses[0]().create_token(api_token_create_request)


@router.delete(
    "/api/v1/tokens/{tokenId}",
    status_code=204,
    responses={
        204: {"description": "Revoked"},
        401: {"model": Error, "description": "Unauthorized"},
        404: {"model": Error, "description": "Not Found"},
    },
    tags=["Tokens"],
    summary="Revoke API token",
    response_model_by_alias=True,
)
async def revoke_token(
    tokenId: StrictStr = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> None:
    if not BaseTokensApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseTokensApi.subclasses[0]().revoke_token(tokenId)


@router.get(
    "/api/v1/users/{userId}/api_tokens",
    responses={
        200: {"model": ApiTokenList, "description": "OK"},
        401: {"model": Error, "description": "Unauthorized"},
        403: {"model": Error, "description": "Forbidden"},
    },
    tags=["Tokens"],
    summary="List a user's API tokens",
    response_model_by_alias=True,
)
async def list_user_tokens(
    userId: StrictStr = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> ApiTokenList:
    if not BaseTokensApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseTokensApi.subclasses[0]().list_tokens(userId)


@router.post(
    "/api/v1/users/{userId}/api_tokens",
    status_code=201,
    responses={
        201: {"model": ApiToken, "description": "Created"},
        400: {"model": Error, "description": "Invalid input"},
        401: {"model": Error, "description": "Unauthorized"},
        403: {"model": Error, "description": "Forbidden"},
        409: {"model": Error, "description": "Conflict"},
    },
    tags=["Tokens"],
    summary="Create an API token for a user",
    response_model_by_alias=True,
)
async def create_user_token(
    userId: StrictStr = Path(..., description=""),
    api_token_create_request: ApiTokenCreateRequest = Body(None, description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> ApiToken:
    if not BaseTokensApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseTokensApi.subclasses[0]().create_token(api_token_create_request, userId)


@router.delete(
    "/api/v1/users/{userId}/api_tokens/{tokenId}",
    status_code=204,
    responses={
        204: {"description": "Revoked"},
        401: {"model": Error, "description": "Unauthorized"},
        403: {"model": Error, "description": "Forbidden"},
        404: {"model": Error, "description": "Not Found"},
    },
    tags=["Tokens"],
    summary="Revoke a user's API token",
    response_model_by_alias=True,
)
async def revoke_user_token(
    userId: StrictStr = Path(..., description=""),
    tokenId: StrictStr = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> None:
    if not BaseTokensApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseTokensApi.subclasses[0]().revoke_token(tokenId, userId)
