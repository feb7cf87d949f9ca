# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from datetime import datetime

from pydantic import StrictStr

from registry_api.models.registry_model import RegistryModel


class HealthStatus(RegistryModel):
    status: StrictStr
    version: StrictStr
    timestamp: datetime
