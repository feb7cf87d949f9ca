# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field, StrictInt, StrictStr

from registry_api.models.registry_model import RegistryModel


class AuditRecord(RegistryModel):
    """
    Append-only record of a moderation or publishing action.
    """  # noqa: E501

    id: StrictInt
    action: StrictStr
    user_id: Optional[StrictStr] = Field(default=None, alias="userId")
    entry_id: StrictStr = Field(alias="entryId")
    version_id: Optional[StrictStr] = Field(default=None, alias="versionId")
    metadata: Optional[Dict[str, Any]] = None
    timestamp: datetime
