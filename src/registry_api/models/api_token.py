# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, StrictBool, StrictStr

from registry_api.models.registry_model import RegistryModel


class ApiToken(RegistryModel):
    """
    API token metadata. ``token`` is only populated in the creation response.
    """  # noqa: E501

    id: StrictStr
    user_id: StrictStr = Field(alias="userId")
    name: StrictStr
    token: Optional[StrictStr] = None
    revoked: StrictBool = False
    revoked_at: Optional[datetime] = Field(default=None, alias="revokedAt")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    last_used_at: Optional[datetime] = Field(default=None, alias="lastUsedAt")
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")
