# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from pydantic import Field, StrictBool, StrictInt

from registry_api.models.registry_model import RegistryModel


class Pagination(RegistryModel):
    """
    Page position and totals for a catalog listing.
    """  # noqa: E501

    page: StrictInt
    limit: StrictInt
    total: StrictInt
    total_pages: StrictInt = Field(alias="totalPages")
    has_next_page: StrictBool = Field(alias="hasNextPage")
    has_prev_page: StrictBool = Field(alias="hasPrevPage")
