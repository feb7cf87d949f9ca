# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import Optional

from pydantic import StrictStr

from registry_api.models.registry_model import RegistryModel


class CatalogFilters(RegistryModel):
    """
    Normalized filters echoed back with a listing.
    """  # noqa: E501

    query: Optional[StrictStr] = None
    sort: StrictStr = "relevance"
    verified: StrictStr = "all"
    type: StrictStr = "all"
    owner: Optional[StrictStr] = None
    contributor: Optional[StrictStr] = None
