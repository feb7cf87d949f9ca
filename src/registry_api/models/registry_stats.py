# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from pydantic import StrictInt

from registry_api.models.registry_model import RegistryModel


class RegistryStats(RegistryModel):
    """
    Registry-wide counters shown on the landing page.
    """  # noqa: E501

    packages: StrictInt = 0
    services: StrictInt = 0
    releases: StrictInt = 0
    downloads: StrictInt = 0
