from __future__ import annotations

from registry_api.apis.catalog_api_base import BaseCatalogApi
from registry_api.models.entry_create_request import EntryCreateRequest
from registry_api.models.entry_detail import EntryDetail
from registry_api.models.entry_update_request import EntryUpdateRequest
from registry_api.models.owner_add_request import OwnerAddRequest
from registry_api.models.owner_list import OwnerList
from registry_api.models.ownership_transfer_request import OwnershipTransferRequest
from registry_api.models.package_list_response import PackageListResponse
from registry_api.models.service_list_response import ServiceListResponse
from registry_api.services.catalog_service import CatalogService

_service = CatalogService()


class CatalogApiImpl(BaseCatalogApi):
    async def list_entries(
        self,
        kind: str,
        q: str | None,
        sort: str | None,
        verified: str | None,
        type: str | None,
        owner: str | None,
        contributor: str | None,
        page: str | None,
        limit: str | None,
    ) -> PackageListResponse | ServiceListResponse:
        return await _service.list_entries(kind, q, sort, verified, type, owner, contributor, page, limit)

    async def create_entry(
        self,
        kind: str,
        entry_create_request: EntryCreateRequest,
    ) -> EntryDetail:
        return await _service.create_entry(kind, entry_create_request)

    async def get_entry(
        self,
        kind: str,
        entry_id: str,
    ) -> EntryDetail:
        return await _service.get_entry(kind, entry_id)

    async def update_entry(
        self,
        kind: str,
        entry_id: str,
        entry_update_request: EntryUpdateRequest,
    ) -> EntryDetail:
        return await _service.update_entry(kind, entry_id, entry_update_request)

    async def delete_entry(
        self,
        kind: str,
        entry_id: str,
    ) -> None:
        return await _service.delete_entry(kind, entry_id)

    async def transfer_entry(
        self,
        kind: str,
        entry_id: str,
        ownership_transfer_request: OwnershipTransferRequest,
    ) -> EntryDetail:
        return await _service.transfer_entry(kind, entry_id, ownership_transfer_request)

    async def list_owners(
        self,
        kind: str,
        entry_id: str,
    ) -> OwnerList:
        return await _service.list_owners(kind, entry_id)

    async def add_owner(
        self,
        kind: str,
        entry_id: str,
        owner_add_request: OwnerAddRequest,
    ) -> OwnerList:
        return await _service.add_owner(kind, entry_id, owner_add_request)

    async def remove_owner(
        self,
        kind: str,
        entry_id: str,
        user_id: str,
    ) -> None:
        return await _service.remove_owner(kind, entry_id, user_id)
