# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from registry_api.models.api_token import ApiToken
from registry_api.models.registry_model import RegistryModel


class ApiTokenList(RegistryModel):
    items: List[ApiToken] = Field(default_factory=list)
