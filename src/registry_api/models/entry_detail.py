# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from registry_api.models.audit_record import AuditRecord
from registry_api.models.entry_stats import EntryStats
from registry_api.models.entry_summary import EntrySummary
from registry_api.models.user import User
from registry_api.models.version_detail import VersionDetail


class EntryDetail(EntrySummary):
    """
    Full entry view: owners, versions, audit trail and aggregates.
    """  # noqa: E501

    primary_owner: Optional[User] = Field(default=None, alias="primaryOwner")
    secondary_owners: List[User] = Field(default_factory=list, alias="secondaryOwners")
    versions: List[VersionDetail] = Field(default_factory=list)
    audits: List[AuditRecord] = Field(default_factory=list)
    default_version_data: Optional[VersionDetail] = Field(default=None, alias="defaultVersionData")
    stats: EntryStats = Field(default_factory=EntryStats)
