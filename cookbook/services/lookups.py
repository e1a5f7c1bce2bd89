"""Shared lookups and input checks used before any write."""

from sqlalchemy.orm import Session

from cookbook.models.cookbook import Cookbook
from cookbook.models.recipe import Recipe
from cookbook.schemas.cookbook import MAX_ID
from cookbook.services.exceptions import (
    CookbookNotFoundError,
    InvalidInputError,
    RecipeNotFoundError,
)

MAX_NAME_LENGTH = 255


def clean_name(value: str | None, label: str = "Name") -> str:
    """Trim a user-supplied name, rejecting blank or oversized values."""
    name = (value or "").strip()
    if not name:
        raise InvalidInputError(f"{label} must not be blank")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInputError(f"{label} must be at most {MAX_NAME_LENGTH} characters")
    return name


def require_positive_id(value: int, label: str = "id") -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_ID:
        raise InvalidInputError(f"{label} must be a positive integer")
    return value


def require_recipe(db: Session, recipe_id: int) -> Recipe:
    """Get a recipe or raise RecipeNotFoundError."""
    require_positive_id(recipe_id, "recipe id")
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if not recipe:
        raise RecipeNotFoundError(recipe_id)
    return recipe


def require_cookbook(db: Session, cookbook_id: int) -> Cookbook:
    """Get a cookbook or raise CookbookNotFoundError."""
    require_positive_id(cookbook_id, "cookbook id")
    cookbook = db.query(Cookbook).filter(Cookbook.id == cookbook_id).first()
    if not cookbook:
        raise CookbookNotFoundError(cookbook_id)
    return cookbook
