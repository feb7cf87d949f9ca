# coding: utf-8

from typing import List

from pydantic import BaseModel, Field


class TokenModel(BaseModel):
    """Resolved caller identity handed to route handlers."""

    sub: str
    roles: List[str] = Field(default_factory=list)
    credential: str = "anonymous"
