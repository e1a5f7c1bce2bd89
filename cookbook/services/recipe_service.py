"""Recipe write path: multi-table mutations in a single transaction."""

import logging
from collections.abc import Sequence

from sqlalchemy import case, delete, update
from sqlalchemy.orm import Session

from cookbook.database import transaction
from cookbook.models.recipe import Recipe, RecipeIngredient, RecipeNote, RecipeStep
from cookbook.schemas.recipe import (
    IngredientInput,
    RecipeCreate,
    RecipeUpdate,
    to_ingredient_row,
)
from cookbook.services.catalog import IngredientCatalog
from cookbook.services.exceptions import RecipeNotFoundError
from cookbook.services.ledger import LikeLedger, TagLedger
from cookbook.services.lookups import (
    clean_name,
    require_cookbook,
    require_positive_id,
    require_recipe,
)
from cookbook.services.ordered_list import replace_ordered_rows

logger = logging.getLogger(__name__)


class RecipeService:
    """Service for recipe mutations.

    Every public method validates first, then applies all of its table
    writes inside one transaction: either everything commits or nothing
    is visible.
    """

    def __init__(self, db: Session):
        self.db = db
        self.catalog = IngredientCatalog(db)
        self.tags = TagLedger(db)
        self.likes = LikeLedger(db)

    # --- Child collections ---

    def _write_ingredients(self, recipe_id: int, entries: Sequence[IngredientInput]) -> None:
        rows = [to_ingredient_row(entry) for entry in entries]
        lines = replace_ordered_rows(
            self.db, RecipeIngredient, recipe_id, [row.model_dump() for row in rows]
        )
        for line, row in zip(lines, rows, strict=True):
            if row.name:
                self.catalog.link_line(line, row.name)
            else:
                self.catalog.link_plain_line(line)
        self.db.flush()

    def _write_steps(self, recipe_id: int, steps: Sequence[str]) -> None:
        replace_ordered_rows(
            self.db, RecipeStep, recipe_id, [{"instruction": step} for step in steps]
        )

    def _write_notes(self, recipe_id: int, notes: str | None) -> None:
        self.db.execute(delete(RecipeNote).where(RecipeNote.recipe_id == recipe_id))
        if notes and notes.strip():
            self.db.add(RecipeNote(recipe_id=recipe_id, content=notes))
            self.db.flush()

    # --- Recipes ---

    def create_recipe(self, payload: RecipeCreate) -> int:
        """Create a recipe with its ingredients, steps, notes and tags."""
        require_cookbook(self.db, payload.cookbook_id)

        with transaction(self.db):
            recipe = Recipe(
                cookbook_id=payload.cookbook_id,
                title=payload.title,
                description=payload.description or "",
                author=payload.author or "",
                photo=payload.photo_data_url,
                servings=payload.servings or 1,
            )
            self.db.add(recipe)
            self.db.flush()  # Get recipe.id

            self._write_ingredients(recipe.id, payload.ingredients or [])
            self._write_steps(recipe.id, payload.steps or [])
            if payload.notes and payload.notes.strip():
                self._write_notes(recipe.id, payload.notes)
            for name in payload.tags or []:
                self.tags.add_tag(recipe.id, name)
            recipe_id = recipe.id

        logger.info(f"Created recipe {recipe_id} in cookbook {payload.cookbook_id}")
        return recipe_id

    def update_recipe(self, recipe_id: int, patch: RecipeUpdate) -> None:
        """Apply a sparse update.

        Scalars are only written when present. Ingredients, steps, notes
        and tags are fully replaced whenever they are present at all.
        """
        recipe = require_recipe(self.db, recipe_id)

        with transaction(self.db):
            if patch.title is not None:
                recipe.title = patch.title
            if patch.description is not None:
                recipe.description = patch.description
            if patch.author is not None:
                recipe.author = patch.author
            if patch.servings is not None:
                recipe.servings = patch.servings
            if patch.is_set("photo_data_url"):
                recipe.photo = patch.photo_data_url
            self.db.flush()

            if patch.ingredients is not None:
                self._write_ingredients(recipe_id, patch.ingredients)
            if patch.steps is not None:
                self._write_steps(recipe_id, patch.steps)
            if patch.notes is not None:
                self._write_notes(recipe_id, patch.notes)
            if patch.tags is not None:
                self.tags.replace_tags(recipe_id, patch.tags)

        logger.info(f"Updated recipe {recipe_id}: {sorted(patch.model_fields_set)}")

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe; the store cascades to all of its child rows."""
        require_positive_id(recipe_id, "recipe id")
        with transaction(self.db):
            deleted = self.db.execute(delete(Recipe).where(Recipe.id == recipe_id)).rowcount
        if not deleted:
            raise RecipeNotFoundError(recipe_id)
        logger.info(f"Deleted recipe {recipe_id}")

    # --- Counters ---

    def _apply_uses(self, recipe_id: int, value) -> int:
        require_recipe(self.db, recipe_id)
        with transaction(self.db):
            self.db.execute(
                update(Recipe)
                .where(Recipe.id == recipe_id)
                .values(uses=value)
                .execution_options(synchronize_session=False)
            )
            uses = self.db.query(Recipe.uses).filter(Recipe.id == recipe_id).scalar()
        return uses

    def increment_uses(self, recipe_id: int) -> int:
        """Add one to the use counter and return the new value."""
        return self._apply_uses(recipe_id, Recipe.uses + 1)

    def decrement_uses(self, recipe_id: int) -> int:
        """Subtract one from the use counter, never going below zero."""
        return self._apply_uses(recipe_id, case((Recipe.uses > 0, Recipe.uses - 1), else_=0))

    # --- Tags and likes ---

    def add_tag(self, recipe_id: int, name: str) -> bool:
        """Link a tag. Returns False when the recipe already had it."""
        name = clean_name(name, "Tag name")
        require_recipe(self.db, recipe_id)
        with transaction(self.db):
            return self.tags.add_tag(recipe_id, name)

    def remove_tag(self, recipe_id: int, name: str) -> bool:
        name = clean_name(name, "Tag name")
        require_recipe(self.db, recipe_id)
        with transaction(self.db):
            return self.tags.remove_tag(recipe_id, name)

    def add_like(self, recipe_id: int, name: str) -> bool:
        """Record a like. Returns False when this name already liked the recipe."""
        name = clean_name(name, "Liker name")
        require_recipe(self.db, recipe_id)
        with transaction(self.db):
            return self.likes.add_like(recipe_id, name)

    def remove_like(self, recipe_id: int, name: str) -> bool:
        name = clean_name(name, "Liker name")
        require_recipe(self.db, recipe_id)
        with transaction(self.db):
            return self.likes.remove_like(recipe_id, name)
