from __future__ import annotations

from fastapi import UploadFile
from fastapi.responses import FileResponse, PlainTextResponse

from registry_api.apis.versions_api_base import BaseVersionsApi
from registry_api.models.version_detail import VersionDetail
from registry_api.models.version_list import VersionList
from registry_api.models.version_update_request import VersionUpdateRequest
from registry_api.services.versions_service import VersionsService

_service = VersionsService()


class VersionsApiImpl(BaseVersionsApi):
    async def list_versions(
        self,
        kind: str,
        entry_id: str,
    ) -> VersionList:
        return await _service.list_versions(kind, entry_id)

    async def create_version(
        self,
        kind: str,
        entry_id: str,
        version: str,
        license: str | None,
        authors: str | None,
        contributors: list[str] | None,
        tarball: UploadFile | None,
        readme: UploadFile | None,
        changelog: UploadFile | None,
    ) -> VersionDetail:
        return await _service.create_version(
            kind, entry_id, version, license, authors, contributors, tarball, readme, changelog
        )

    async def get_version(
        self,
        kind: str,
        entry_id: str,
        version: str,
    ) -> VersionDetail:
        return await _service.get_version(kind, entry_id, version)

    async def update_version(
        self,
        kind: str,
        entry_id: str,
        version: str,
        version_update_request: VersionUpdateRequest,
    ) -> VersionDetail:
        return await _service.update_version(kind, entry_id, version, version_update_request)

    async def upload_document(
        self,
        kind: str,
        entry_id: str,
        version: str,
        document: str,
        file: UploadFile | None,
    ) -> VersionDetail:
        return await _service.upload_document(kind, entry_id, version, document, file)

    async def get_document(
        self,
        kind: str,
        entry_id: str,
        version: str,
        document: str,
    ) -> PlainTextResponse:
        return await _service.get_document(kind, entry_id, version, document)

    async def download_version(
        self,
        kind: str,
        entry_id: str,
        version: str,
    ) -> FileResponse:
        return await _service.download(kind, entry_id, version)
