"""Cookbook schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

# Largest id the store can hold (signed 64-bit)
MAX_ID = 2**63 - 1

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class CookbookCreate(BaseModel):
    """Create or rename a cookbook."""

    name: Name


class CookbookResponse(BaseModel):
    """Cookbook response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class NameRequest(BaseModel):
    """Body carrying a single tag or liker name."""

    name: Name = Field(..., description="Trimmed, non-blank name")
