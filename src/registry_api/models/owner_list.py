# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from registry_api.models.registry_model import RegistryModel
from registry_api.models.user import User


class OwnerList(RegistryModel):
    """
    Primary owner plus secondary owners of an entry.
    """  # noqa: E501

    primary_owner: Optional[User] = Field(default=None, alias="primaryOwner")
    items: List[User] = Field(default_factory=list, description="Secondary owners.")
