# coding: utf-8

"""
    MCP Registry API (v1)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, StrictStr
from typing_extensions import Annotated

from registry_api.models.registry_model import RegistryModel


class EntryCreateRequest(RegistryModel):
    """
    Payload registering a new package or service.
    """  # noqa: E501

    id: Annotated[str, Field(min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")]
    name: Annotated[str, Field(min_length=1, max_length=100)]
    categories: Optional[List[StrictStr]] = Field(default=None, description="Package categories.")
    type: Optional[StrictStr] = Field(default=None, description="Service type.")
    keywords: List[Annotated[str, Field(min_length=1, max_length=50)]] = Field(default_factory=list)
    description: Optional[Annotated[str, Field(max_length=500)]] = None
    homepage: Optional[StrictStr] = None
    repository: Optional[StrictStr] = None
