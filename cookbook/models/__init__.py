"""SQLAlchemy models."""

from cookbook.models.cookbook import Cookbook
from cookbook.models.ingredient_catalog import CatalogIngredient
from cookbook.models.like import RecipeLike
from cookbook.models.recipe import Recipe, RecipeIngredient, RecipeNote, RecipeStep
from cookbook.models.tag import RecipeTag, Tag

__all__ = [
    "Cookbook",
    "Recipe",
    "RecipeIngredient",
    "RecipeStep",
    "RecipeNote",
    "Tag",
    "RecipeTag",
    "RecipeLike",
    "CatalogIngredient",
]
