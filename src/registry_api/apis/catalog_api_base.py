# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401

from pydantic import Field, StrictStr
from typing import Optional, Union
from typing_extensions import Annotated
from registry_api.models.entry_create_request import EntryCreateRequest
from registry_api.models.entry_detail import EntryDetail
from registry_api.models.entry_update_request import EntryUpdateRequest
from registry_api.models.owner_add_request import OwnerAddRequest
from registry_api.models.owner_list import OwnerList
from registry_api.models.ownership_transfer_request import OwnershipTransferRequest
from registry_api.models.package_list_response import PackageListResponse
from registry_api.models.service_list_response import ServiceListResponse


class BaseCatalogApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BaseCatalogApi.subclasses = BaseCatalogApi.subclasses + (cls,)
    async def list_entries(
        self,
        kind: StrictStr,
        q: Annotated[Optional[StrictStr], Field(description="Search text")],
        sort: Annotated[Optional[StrictStr], Field(description="relevance, downloads, recent or name")],
        verified: Annotated[Optional[StrictStr], Field(description="all, verified or unverified")],
        type: Annotated[Optional[StrictStr], Field(description="Category filter")],
        owner: Annotated[Optional[StrictStr], Field(description="Owner username or display name")],
        contributor: Annotated[Optional[StrictStr], Field(description="Contributor username")],
        page: Annotated[Optional[StrictStr], Field(description="1-based page index")],
        limit: Annotated[Optional[StrictStr], Field(description="Page size")],
    ) -> Union[PackageListResponse, ServiceListResponse]:
        ...


    async def create_entry(
        self,
        kind: StrictStr,
        entry_create_request: EntryCreateRequest,
    ) -> EntryDetail:
        ...


    async def get_entry(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
    ) -> EntryDetail:
        ...


    async def update_entry(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        entry_update_request: EntryUpdateRequest,
    ) -> EntryDetail:
        ...


    async def delete_entry(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
    ) -> None:
        ...


    async def transfer_entry(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        ownership_transfer_request: OwnershipTransferRequest,
    ) -> EntryDetail:
        ...


    async def list_owners(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
    ) -> OwnerList:
        ...


    async def add_owner(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        owner_add_request: OwnerAddRequest,
    ) -> OwnerList:
        ...


    async def remove_owner(
        self,
        kind: StrictStr,
        entry_id: StrictStr,
        user_id: StrictStr,
    ) -> None:
        ...
