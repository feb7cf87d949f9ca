# coding: utf-8

from typing import Dict, List  # noqa: F401
import importlib
import pkgutil

from registry_api.apis.stats_api_base import BaseStatsApi
import registry_api.impl

from fastapi import (  # noqa: F401
    APIRouter,
    HTTPException,
    Security,
)

from registry_api.models.extra_models import TokenModel  # noqa: F401
from registry_api.models.registry_stats import RegistryStats
from registry_api.security_api import get_token_bearerAuth

router = APIRouter()

ns_pkg = registry_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


@router.get(
    "/api/v1/stats",
    responses={
        200: {"model": RegistryStats, "description": "OK"},
    },
    tags=["Stats"],
    summary="Registry totals",
    response_model_by_alias=True,
)
async def get_stats(
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth, scopes=[]
    ),
) -> RegistryStats:
    if not BaseStatsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseStatsApi.subclasses[0]().get_stats()
