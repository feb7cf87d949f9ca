# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401
from fastapi import UploadFile
from fastapi.responses import FileResponse, PlainTextResponse

from pydantic import StrictStr
from typing import Optional
from registry_api.models.version_detail import VersionDetail
from registry_api.models.version_list import VersionList
from registry_api.models.version_update_request import VersionUpdateRequest


class BaseVersionsApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BaseVersionsApi.subclasses = BaseVersionsApi.subclasses + (cls,)
    async def list_versions(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
    ) -> VersionList:
        ...


    async def create_version(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        version: StrictStr,
        license: Optional[StrictStr],
        authors: Optional[StrictStr],
        contributors: Optional[List[StrictStr]],
        tarball: Optional[UploadFile],
        readme: Optional[UploadFile],
        changelog: Optional[UploadFile],
    ) -> VersionDetail:
        ...


    async def get_version(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        version: StrictStr,
    ) -> VersionDetail:
        ...


    async def update_version(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        version: StrictStr,
        version_update_request: VersionUpdateRequest,
    ) -> VersionDetail:
        ...


    async def upload_document(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        version: StrictStr,
        document: StrictStr,
        file: Optional[UploadFile],
    ) -> VersionDetail:
        ...


    async def get_document(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        version: StrictStr,
        document: StrictStr,
    ) -> PlainTextResponse:
        ...


    async def download_version(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        version: StrictStr,
    ) -> FileResponse:
        ...
