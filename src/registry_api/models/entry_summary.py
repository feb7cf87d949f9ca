# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, StrictBool, StrictInt, StrictStr

from registry_api.models.registry_model import RegistryModel


class EntrySummary(RegistryModel):
    """
    Catalog entry (package or service) as shown in listings.
    """  # noqa: E501

    id: StrictStr
    kind: StrictStr
    name: StrictStr
    description: Optional[StrictStr] = None
    categories: List[StrictStr] = Field(default_factory=list)
    type: Optional[StrictStr] = Field(default=None, description="Service type; services only.")
    keywords: List[StrictStr] = Field(default_factory=list)
    homepage: Optional[StrictStr] = None
    repository: Optional[StrictStr] = None
    is_verified: StrictBool = Field(default=False, alias="isVerified")
    is_deprecated: StrictBool = Field(default=False, alias="isDeprecated")
    deprecation_message: Optional[StrictStr] = Field(default=None, alias="deprecationMessage")
    primary_owner_id: StrictStr = Field(alias="primaryOwnerId")
    default_version: Optional[StrictStr] = Field(default=None, alias="defaultVersion")
    total_downloads: StrictInt = Field(default=0, alias="totalDownloads")
    owners: List[StrictStr] = Field(default_factory=list, description="Owner display names.")
    contributors: List[StrictStr] = Field(
        default_factory=list, description="Contributor display names."
    )
    max_version: Optional[StrictStr] = Field(default=None, alias="maxVersion")
    max_stable_version: Optional[StrictStr] = Field(default=None, alias="maxStableVersion")
    newest_version: Optional[StrictStr] = Field(default=None, alias="newestVersion")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
