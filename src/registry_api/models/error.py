# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field, StrictStr

from registry_api.models.registry_model import RegistryModel


class Error(RegistryModel):
    """
    Error envelope returned for every non-2xx response.
    """  # noqa: E501

    error: StrictStr = Field(description="Machine-readable error code.")
    message: StrictStr = Field(description="Human-readable message.")
    request_id: Optional[StrictStr] = Field(default=None, alias="requestId")
    details: Optional[Dict[str, Any]] = None
