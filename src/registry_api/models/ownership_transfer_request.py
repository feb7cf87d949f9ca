# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from pydantic import Field, StrictStr

from registry_api.models.registry_model import RegistryModel


class OwnershipTransferRequest(RegistryModel):
    """
    Hand the primary ownership of an entry to another user.
    """  # noqa: E501

    new_owner_id: StrictStr = Field(alias="newOwnerId")
