# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, StrictStr

from registry_api.models.registry_model import RegistryModel


class User(RegistryModel):
    """
    Public profile of a registry user.
    """  # noqa: E501

    id: StrictStr
    email: Optional[StrictStr] = None
    username: StrictStr
    display_name: Optional[StrictStr] = Field(default=None, alias="displayName")
    avatar_url: Optional[StrictStr] = Field(default=None, alias="avatarUrl")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
