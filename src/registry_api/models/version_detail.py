# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, StrictBool, StrictInt, StrictStr

from registry_api.models.registry_model import RegistryModel


class VersionDetail(RegistryModel):
    """
    A published version of a package or service.
    """  # noqa: E501

    id: StrictStr
    entry_id: StrictStr = Field(alias="entryId")
    version: StrictStr
    publisher_id: Optional[StrictStr] = Field(default=None, alias="publisherId")
    is_stable: StrictBool = Field(default=True, alias="isStable")
    size: StrictInt = 0
    license: Optional[StrictStr] = None
    authors: List[StrictStr] = Field(default_factory=list)
    contributors: List[StrictStr] = Field(default_factory=list, description="Contributor user ids.")
    readme_url: Optional[StrictStr] = Field(default=None, alias="readmeUrl")
    changelog_url: Optional[StrictStr] = Field(default=None, alias="changelogUrl")
    digest: Optional[StrictStr] = None
    tarball_url: Optional[StrictStr] = Field(default=None, alias="tarballUrl")
    downloads: StrictInt = 0
    is_yanked: StrictBool = Field(default=False, alias="isYanked")
    yank_message: Optional[StrictStr] = Field(default=None, alias="yankMessage")
    yanked_at: Optional[datetime] = Field(default=None, alias="yankedAt")
    yanked_by_user_id: Optional[StrictStr] = Field(default=None, alias="yankedByUserId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
