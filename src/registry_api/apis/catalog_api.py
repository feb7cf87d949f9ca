# coding: utf-8

from typing import Dict, List, Any  # noqa: F401
import importlib
import pkgutil

from registry_api.apis.catalog_api_base import BaseCatalogApi
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
from typing import Optional, Union
from registry_api.models.entry_create_request import EntryCreateRequest
from registry_api.models.entry_detail import EntryDetail
from registry_api.models.entry_update_request import EntryUpdateRequest
from registry_api.models.error import Error
from registry_api.models.owner_add_request import OwnerAddRequest
from registry_api.models.owner_list import OwnerList
from registry_api.models.ownership_transfer_request import OwnershipTransferRequest
from registry_api.models.package_list_response import PackageListResponse
from registry_api.models.service_list_response import ServiceListResponse
from registry_api.security_api import get_token_bearerAuth

ns_pkg = registry_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


def _impl() -> BaseCatalogApi:
    if not BaseCatalogApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return BaseCatalogApi.subclasses[0]()


def build_router(kind: str) -> APIRouter:
    """Entry routes for one catalog kind, mounted at ``/api/v1/{kind}s``."""
    router = APIRouter()
    collection = f"/api/v1/{kind}s"
    tag = f"{kind.capitalize()}s"
    list_model = ServiceListResponse if kind == "service" else PackageListResponse

    @router.get(
        collection,
        responses={
            200: {"model": list_model, "description": "OK"},
        },
        tags=[tag],
        summary=f"List {kind}s",
        response_model_by_alias=True,
    )
    async def list_entries(
        q: Optional[StrictStr] = Query(None, description="Search text", alias="q"),
        sort: Optional[StrictStr] = Query(None, description="One of relevance, downloads, newest, oldest, name-asc, name-desc or updated", alias="sort"),
        verified: Optional[StrictStr] = Query(None, description="all, verified or unverified", alias="verified"),
        type: Optional[StrictStr] = Query(None, description="Category filter", alias="type"),
        owner: Optional[StrictStr] = Query(None, description="Owner username or display name", alias="owner"),
        contributor: Optional[StrictStr] = Query(None, description="Contributor username", alias="contributor"),
        page: Optional[StrictStr] = Query(None, description="1-based page index", alias="page"),
        limit: Optional[StrictStr] = Query(None, description="Page size", alias="limit"),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> Union[PackageListResponse, ServiceListResponse]:
        return await _impl().list_entries(kind, q, sort, verified, type, owner, contributor, page, limit)

    @router.post(
        collection,
        status_code=201,
        responses={
            201: {"model": EntryDetail, "description": "Created"},
            400: {"model": Error, "description": "Invalid input"},
            401: {"model": Error, "description": "Unauthorized"},
            409: {"model": Error, "description": "Conflict"},
        },
        tags=[tag],
        summary=f"Create {kind}",
        response_model_by_alias=True,
    )
    async def create_entry(
        entry_create_request: EntryCreateRequest = Body(None, description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> EntryDetail:
        return await _impl().create_entry(kind, entry_create_request)

    @router.get(
        collection + "/{entryId}",
        responses={
            200: {"model": EntryDetail, "description": "OK"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Get {kind}",
        response_model_by_alias=True,
    )
    async def get_entry(
        entryId: StrictStr = Path(..., description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> EntryDetail:
        return await _impl().get_entry(kind, entryId)

    @router.patch(
        collection + "/{entryId}",
        responses={
            200: {"model": EntryDetail, "description": "OK"},
            400: {"model": Error, "description": "Invalid input"},
            401: {"model": Error, "description": "Unauthorized"},
            403: {"model": Error, "description": "Forbidden"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Update {kind}",
        response_model_by_alias=True,
    )
    async def update_entry(
        entryId: StrictStr = Path(..., description=""),
        entry_update_request: EntryUpdateRequest = Body(None, description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> EntryDetail:
        return await _impl().update_entry(kind, entryId, entry_update_request)

    @router.delete(
        collection + "/{entryId}",
        status_code=204,
        responses={
            204: {"description": "Deleted"},
            401: {"model": Error, "description": "Unauthorized"},
            403: {"model": Error, "description": "Forbidden"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Delete {kind}",
        response_model_by_alias=True,
    )
    async def delete_entry(
        entryId: StrictStr = Path(..., description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> None:
        return await _impl().delete_entry(kind, entryId)

    @router.post(
        collection + "/{entryId}/transfer",
        responses={
            200: {"model": EntryDetail, "description": "OK"},
            401: {"model": Error, "description": "Unauthorized"},
            403: {"model": Error, "description": "Forbidden"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Transfer {kind} ownership",
        response_model_by_alias=True,
    )
    async def transfer_entry(
        entryId: StrictStr = Path(..., description=""),
        ownership_transfer_request: OwnershipTransferRequest = Body(None, description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> EntryDetail:
        return await _impl().transfer_entry(kind, entryId, ownership_transfer_request)

    @router.get(
        collection + "/{entryId}/owners",
        responses={
            200: {"model": OwnerList, "description": "OK"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"List {kind} owners",
        response_model_by_alias=True,
    )
    async def list_owners(
        entryId: StrictStr = Path(..., description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> OwnerList:
        return await _impl().list_owners(kind, entryId)

    @router.post(
        collection + "/{entryId}/owners",
        status_code=201,
        responses={
            201: {"model": OwnerList, "description": "Created"},
            401: {"model": Error, "description": "Unauthorized"},
            403: {"model": Error, "description": "Forbidden"},
            404: {"model": Error, "description": "Not Found"},
            409: {"model": Error, "description": "Conflict"},
        },
        tags=[tag],
        summary=f"Add {kind} owner",
        response_model_by_alias=True,
    )
    async def add_owner(
        entryId: StrictStr = Path(..., description=""),
        owner_add_request: OwnerAddRequest = Body(None, description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> OwnerList:
        return await _impl().add_owner(kind, entryId, owner_add_request)

    @router.delete(
        collection + "/{entryId}/owners/{userId}",
        status_code=204,
        responses={
            204: {"description": "Deleted"},
            400: {"model": Error, "description": "Invalid input"},
            401: {"model": Error, "description": "Unauthorized"},
            403: {"model": Error, "description": "Forbidden"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Remove {kind} owner",
        response_model_by_alias=True,
    )
    async def remove_owner(
        entryId: StrictStr = Path(..., description=""),
        userId: StrictStr = Path(..., description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> None:
        return await _impl().remove_owner(kind, entryId, userId)

    return router


packages_router = build_router("package")
services_router = build_router("service")
