# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from registry_api.models.registry_model import RegistryModel
from registry_api.models.version_detail import VersionDetail


class VersionList(RegistryModel):
    """
    Versions of one entry, newest first.
    """  # noqa: E501

    items: List[VersionDetail] = Field(default_factory=list)
