"""Pydantic schemas for API requests and responses."""

from cookbook.schemas.cookbook import CookbookCreate, CookbookResponse, NameRequest
from cookbook.schemas.recipe import (
    RecipeCreate,
    RecipeDetail,
    RecipeFilterOptions,
    RecipeSummary,
    RecipeUpdate,
)

__all__ = [
    "CookbookCreate",
    "CookbookResponse",
    "NameRequest",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeSummary",
    "RecipeDetail",
    "RecipeFilterOptions",
]
