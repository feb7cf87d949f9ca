# coding: utf-8

from typing import Dict, List, Any  # noqa: F401
import importlib
import pkgutil

from registry_api.apis.users_api_base import BaseUsersApi
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
from registry_api.models.account import Account
from registry_api.models.error import Error
from registry_api.models.user import User
from registry_api.models.user_update_request import UserUpdateRequest
from registry_api.security_api import get_token_bearerAuth

router = APIRouter()

ns_pkg = registry_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


@router.get(
    "/api/v1/account",
    responses={
        200: {"model": Account, "description": "OK"},
        401: {"model": Error, "description": "Unauthorized"},
    },
    tags=["Users"],
    summary="Current account",
    response_model_by_alias=True,
)
async def get_account(
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> Account:
    if not BaseUsersApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseUsersApi.subclasses[0]().get_account()


@router.get(
    "/api/v1/users/{userId}",
    responses={
        200: {"model": User, "description": "OK"},
        404: {"model": Error, "description": "Not Found"},
    },
    tags=["Users"],
    summary="Get user",
    response_model_by_alias=True,
)
async def get_user(
    userId: StrictStr = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> User:
    if not BaseUsersApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseUsersApi.subclasses[0]().get_user(userId)


@router.get(
    "/api/v1/user-by-username/{username}",
    responses={
        200: {"model": User, "description": "OK"},
        404: {"model": Error, "description": "Not Found"},
    },
    tags=["Users"],
    summary="Get user by username",
    response_model_by_alias=True,
)
async def get_user_by_username(
    username: StrictStr = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> User:
    if not BaseUsersApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseUsersApi.subclasses[0]().get_user_by_username(username)


@router.patch(
    "/api/v1/users/{userId}",
    responses={
        200: {"model": User, "description": "OK"},
        400: {"model": Error, "description": "Invalid input"},
        401: {"model": Error, "description": "Unauthorized"},
        403: {"model": Error, "description": "Forbidden"},
        404: {"model": Error, "description": "Not Found"},
        409: {"model": Error, "description": "Conflict"},
    },
    tags=["Users"],
    summary="Update user profile",
    response_model_by_alias=True,
)
async def update_user(
    userId: StrictStr = Path(..., description=""),
    user_update_request: UserUpdateRequest = Body(None, description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> User:
    if not BaseUsersApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseUsersApi.subclasses[0]().update_user(userId, user_update_request)


@router.delete(
    "/api/v1/users/{userId}",
    status_code=204,
    responses={
        204: {"description": "Deleted"},
        401: {"model": Error, "description": "Unauthorized"},
        403: {"model": Error, "description": "Forbidden"},
        404: {"model": Error, "description": "Not Found"},
    },
    tags=["Users"],
    summary="Delete user account",
    response_model_by_alias=True,
)
async def delete_user(
    userId: StrictStr = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> None:
    if not BaseUsersApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseUsersApi.subclasses[0]().delete_user(userId)
