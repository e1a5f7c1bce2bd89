"""Ingredient catalog: deduplicated, case-insensitive ingredient names."""

import logging
from collections import defaultdict

from sqlalchemy import literal
from sqlalchemy.orm import Session

from cookbook.models.ingredient_catalog import CatalogIngredient
from cookbook.models.recipe import Recipe, RecipeIngredient
from cookbook.services.exceptions import InvalidInputError
from cookbook.services.ingredient_parser import IngredientLineParser
from cookbook.services.search_terms import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Lowercase and collapse whitespace for catalog identity."""
    return " ".join(name.split()).lower()


class IngredientCatalog:
    """Service for the normalized ingredient vocabulary."""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, name: str) -> int:
        """Return the catalog id for `name`, creating the entry on first sight.

        Lookup ignores case; a new entry keeps the spelling it was first
        given with.
        """
        display = " ".join((name or "").split())
        if not display:
            raise InvalidInputError("Ingredient name must not be blank")

        normalized = display.lower()
        entry = (
            self.db.query(CatalogIngredient)
            .filter(CatalogIngredient.normalized_name == normalized)
            .first()
        )
        if entry:
            return entry.id

        entry = CatalogIngredient(name=display, normalized_name=normalized)
        self.db.add(entry)
        self.db.flush()  # Get entry.id and make it visible to later lookups
        logger.info(f"Catalogued ingredient '{display}' as {entry.id}")
        return entry.id

    def link_line(self, line: RecipeIngredient, name: str | None) -> int | None:
        """Store the catalog id for `name` on an ingredient line.

        Blank or missing names leave the line unlinked.
        """
        if not name or not name.strip():
            return None
        line.ingredient_id = self.resolve(name)
        return line.ingredient_id

    def link_plain_line(self, line: RecipeIngredient) -> int | None:
        """Link a free-text line to the catalog so searches can find it by name.

        Existing catalog names found in the text win; otherwise a name is
        derived from the text and resolved.
        """
        text = (line.line or "").strip()
        if not text:
            return None

        entry = IngredientLineParser.find_catalog_match(text, self._entries_within(text))
        if entry:
            line.ingredient_id = entry.id
            return entry.id

        return self.link_line(line, IngredientLineParser.guess_name(text))

    def _entries_within(self, text: str) -> list[CatalogIngredient]:
        # Candidate entries whose name occurs in the text; the parser
        # re-checks each one in Python.
        return (
            self.db.query(CatalogIngredient)
            .filter(literal(text.lower()).contains(CatalogIngredient.normalized_name))
            .all()
        )

    def suggestions(
        self,
        cookbook_id: int | None = None,
        query: str | None = None,
        limit: int | None = None,
    ) -> list[str]:
        """Canonical names referenced by at least one ingredient line.

        Optionally restricted to one cookbook and to names containing
        `query`. Ordered by catalog insertion, each name at most once.
        """
        q = self.db.query(CatalogIngredient.id, CatalogIngredient.name).join(
            RecipeIngredient, RecipeIngredient.ingredient_id == CatalogIngredient.id
        )
        if cookbook_id is not None:
            q = q.join(Recipe, Recipe.id == RecipeIngredient.recipe_id).filter(
                Recipe.cookbook_id == cookbook_id
            )
        if query and query.strip():
            q = q.filter(
                CatalogIngredient.normalized_name.like(
                    contains_pattern(normalize_name(query)), escape=LIKE_ESCAPE
                )
            )
        q = q.distinct().order_by(CatalogIngredient.id)
        if limit is not None:
            q = q.limit(limit)
        return [name for _, name in q.all()]

    def names_by_recipe(self, recipe_ids: list[int]) -> dict[int, list[str]]:
        """Distinct catalog names per recipe, in ingredient order, in one query."""
        if not recipe_ids:
            return {}
        rows = (
            self.db.query(RecipeIngredient.recipe_id, CatalogIngredient.name)
            .join(CatalogIngredient, CatalogIngredient.id == RecipeIngredient.ingredient_id)
            .filter(RecipeIngredient.recipe_id.in_(recipe_ids))
            .order_by(RecipeIngredient.recipe_id, RecipeIngredient.position)
            .all()
        )
        grouped: dict[int, list[str]] = defaultdict(list)
        for recipe_id, name in rows:
            if name not in grouped[recipe_id]:
                grouped[recipe_id].append(name)
        return dict(grouped)
