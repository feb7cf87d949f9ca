# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from pydantic import Field, StrictStr

from registry_api.models.registry_model import RegistryModel


class OwnerAddRequest(RegistryModel):
    user_id: StrictStr = Field(alias="userId")
