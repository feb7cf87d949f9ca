# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, StrictStr
from typing_extensions import Annotated

from registry_api.models.registry_model import RegistryModel


class UserUpdateRequest(RegistryModel):
    """
    Profile fields the account holder may change.
    """  # noqa: E501

    display_name: Optional[Annotated[str, Field(min_length=1, max_length=100)]] = Field(
        default=None, alias="displayName"
    )
    email: Optional[Annotated[str, Field(max_length=150, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")]] = None
    avatar_url: Optional[StrictStr] = Field(default=None, alias="avatarUrl")
