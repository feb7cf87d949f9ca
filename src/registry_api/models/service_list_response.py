# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from registry_api.models.catalog_filters import CatalogFilters
from registry_api.models.entry_summary import EntrySummary
from registry_api.models.pagination import Pagination
from registry_api.models.registry_model import RegistryModel


class ServiceListResponse(RegistryModel):
    """
    One page of services.
    """  # noqa: E501

    services: List[EntrySummary] = Field(default_factory=list)
    pagination: Pagination
    filters: CatalogFilters
