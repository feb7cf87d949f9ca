# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, StrictBool, StrictStr
from typing_extensions import Annotated

from registry_api.models.registry_model import RegistryModel


class VersionUpdateRequest(RegistryModel):
    """
    Yank state and attached document URLs of a version.
    """  # noqa: E501

    yanked: Optional[StrictBool] = None
    yank_message: Optional[Annotated[str, Field(max_length=200)]] = Field(
        default=None, alias="yankMessage"
    )
    readme: Optional[StrictStr] = Field(default=None, description="README URL.")
    changelog: Optional[StrictStr] = Field(default=None, description="Changelog URL.")
