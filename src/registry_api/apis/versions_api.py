# coding: utf-8

from typing import Dict, List, Any  # noqa: F401
import importlib
import pkgutil

from registry_api.apis.versions_api_base import BaseVersionsApi
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
    File,
    UploadFile,
)
from fastapi.responses import FileResponse, PlainTextResponse

from registry_api.models.extra_models import TokenModel  # noqa: F401
from pydantic import StrictStr
from typing import Optional
from registry_api.models.error import Error
from registry_api.models.version_detail import VersionDetail
from registry_api.models.version_list import VersionList
from registry_api.models.version_update_request import VersionUpdateRequest
from registry_api.security_api import get_token_bearerAuth
from registry_api.services.versions_service import DOCUMENTS

ns_pkg = registry_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


def _impl() -> BaseVersionsApi:
    if not BaseVersionsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return BaseVersionsApi.subclasses[0]()


def build_router(kind: str) -> APIRouter:
    """Version routes for one catalog kind, under ``/api/v1/{kind}s/{entryId}/versions``."""
    router = APIRouter()
    collection = f"/api/v1/{kind}s/{{entryId}}/versions"
    tag = f"{kind.capitalize()} versions"

    @router.get(
        collection,
        responses={
            200: {"model": VersionList, "description": "OK"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"List {kind} versions",
        response_model_by_alias=True,
    )
    async def list_versions(
        entryId: StrictStr = Path(..., description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> VersionList:
        return await _impl().list_versions(kind, entryId)

    @router.post(
        collection,
        status_code=201,
        responses={
            201: {"model": VersionDetail, "description": "Created"},
            400: {"model": Error, "description": "Invalid input"},
            401: {"model": Error, "description": "Unauthorized"},
            403: {"model": Error, "description": "Forbidden"},
            404: {"model": Error, "description": "Not Found"},
            409: {"model": Error, "description": "Conflict"},
        },
        tags=[tag],
        summary=f"Publish {kind} version",
        response_model_by_alias=True,
    )
    async def create_version(
        entryId: StrictStr = Path(..., description=""),
        version: StrictStr = Form(..., description="Semantic version"),
        license: Optional[StrictStr] = Form(None, description="SPDX license identifier"),
        authors: Optional[StrictStr] = Form(None, description="JSON list of author names"),
        contributors: Optional[List[StrictStr]] = Form(None, description="Contributor user ids"),
        tarball: Optional[UploadFile] = File(None, description="gzip tarball"),
        readme: Optional[UploadFile] = File(None, description="README markdown"),
        changelog: Optional[UploadFile] = File(None, description="Changelog markdown"),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> VersionDetail:
        return await _impl().create_version(
            kind, entryId, version, license, authors, contributors, tarball, readme, changelog
        )

    @router.get(
        collection + "/{version}",
        responses={
            200: {"model": VersionDetail, "description": "OK"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Get {kind} version",
        response_model_by_alias=True,
    )
    async def get_version(
        entryId: StrictStr = Path(..., description=""),
        version: StrictStr = Path(..., description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> VersionDetail:
        return await _impl().get_version(kind, entryId, version)

    @router.patch(
        collection + "/{version}",
        responses={
            200: {"model": VersionDetail, "description": "OK"},
            400: {"model": Error, "description": "Invalid input"},
            401: {"model": Error, "description": "Unauthorized"},
            403: {"model": Error, "description": "Forbidden"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Update {kind} version",
        response_model_by_alias=True,
    )
    async def update_version(
        entryId: StrictStr = Path(..., description=""),
        version: StrictStr = Path(..., description=""),
        version_update_request: VersionUpdateRequest = Body(None, description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> VersionDetail:
        return await _impl().update_version(kind, entryId, version, version_update_request)

    @router.get(
        collection + "/{version}/download",
        response_class=FileResponse,
        responses={
            200: {"content": {"application/gzip": {}}, "description": "Tarball"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Download {kind} version",
    )
    async def download_version(
        entryId: StrictStr = Path(..., description=""),
        version: StrictStr = Path(..., description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> FileResponse:
        return await _impl().download_version(kind, entryId, version)

    for document in DOCUMENTS:
        _add_document_routes(router, kind, collection, tag, document)

    return router


def _add_document_routes(
    router: APIRouter, kind: str, collection: str, tag: str, document: str
) -> None:
    path = collection + "/{version}/" + document

    @router.put(
        path,
        responses={
            200: {"model": VersionDetail, "description": "OK"},
            400: {"model": Error, "description": "Invalid input"},
            401: {"model": Error, "description": "Unauthorized"},
            403: {"model": Error, "description": "Forbidden"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Upload {kind} version {document}",
        response_model_by_alias=True,
        name=f"upload_{kind}_{document}",
    )
    async def upload_document(
        entryId: StrictStr = Path(..., description=""),
        version: StrictStr = Path(..., description=""),
        file: Optional[UploadFile] = File(None, description="Markdown document"),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> VersionDetail:
        return await _impl().upload_document(kind, entryId, version, document, file)

    @router.get(
        path,
        response_class=PlainTextResponse,
        responses={
            200: {"content": {"text/plain": {}}, "description": "Document"},
            404: {"model": Error, "description": "Not Found"},
        },
        tags=[tag],
        summary=f"Get {kind} version {document}",
        name=f"get_{kind}_{document}",
    )
    async def get_document(
        entryId: StrictStr = Path(..., description=""),
        version: StrictStr = Path(..., description=""),
        token_bearerAuth: TokenModel = Security(
            get_token_bearerAuth, scopes=[]
        ),
    ) -> PlainTextResponse:
        return await _impl().get_document(kind, entryId, version, document)


packages_router = build_router("package")
services_router = build_router("service")
