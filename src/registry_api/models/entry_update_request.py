# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, StrictBool, StrictStr
from typing_extensions import Annotated

from registry_api.models.registry_model import RegistryModel


class EntryUpdateRequest(RegistryModel):
    """
    Partial update of an entry. Only fields present in the payload change.
    """  # noqa: E501

    name: Optional[Annotated[str, Field(min_length=1, max_length=100)]] = None
    description: Optional[Annotated[str, Field(max_length=500)]] = None
    homepage: Optional[StrictStr] = None
    repository: Optional[StrictStr] = None
    keywords: Optional[List[Annotated[str, Field(min_length=1, max_length=50)]]] = None
    categories: Optional[List[StrictStr]] = None
    type: Optional[StrictStr] = None
    default_version: Optional[StrictStr] = Field(default=None, alias="defaultVersion")
    is_verified: Optional[StrictBool] = Field(default=None, alias="isVerified")
    is_deprecated: Optional[StrictBool] = Field(default=None, alias="isDeprecated")
    deprecation_message: Optional[Annotated[str, Field(max_length=500)]] = Field(
        default=None, alias="deprecationMessage"
    )
