# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field
from typing_extensions import Annotated

from registry_api.models.registry_model import RegistryModel


class ApiTokenCreateRequest(RegistryModel):
    name: Annotated[str, Field(min_length=1, max_length=100)]
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")
