# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from pydantic import Field, StrictBool, StrictStr

from registry_api.models.user import User


class Account(User):
    """
    The authenticated caller, with the credential kind and role it resolved to.
    """  # noqa: E501

    is_admin: StrictBool = Field(default=False, alias="isAdmin")
    credential: StrictStr = Field(default="session", description="session or api_token")
