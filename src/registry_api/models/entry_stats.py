# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, StrictInt, StrictStr

from registry_api.models.registry_model import RegistryModel


class EntryStats(RegistryModel):
    """
    Aggregates shown on an entry's detail page.
    """  # noqa: E501

    total_versions: StrictInt = Field(default=0, alias="totalVersions")
    total_downloads: StrictInt = Field(default=0, alias="totalDownloads")
    latest_version: Optional[StrictStr] = Field(default=None, alias="latestVersion")
    yanked_versions: StrictInt = Field(default=0, alias="yankedVersions")
    total_owners: StrictInt = Field(default=0, alias="totalOwners")
    total_contributors: StrictInt = Field(default=0, alias="totalContributors")
    total_audits: StrictInt = Field(default=0, alias="totalAudits")
