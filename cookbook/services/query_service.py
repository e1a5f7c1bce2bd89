"""Read side: recipe listings, search and detail views."""

from sqlalchemy import exists, func, or_
from sqlalchemy.orm import Session

from cookbook.config import get_settings
from cookbook.models.ingredient_catalog import CatalogIngredient
from cookbook.models.like import RecipeLike
from cookbook.models.recipe import Recipe, RecipeIngredient, RecipeNote, RecipeStep
from cookbook.models.tag import RecipeTag, Tag
from cookbook.schemas.recipe import (
    IngredientLine,
    RecipeDetail,
    RecipeFilterOptions,
    RecipeSummary,
    StructuredIngredientLine,
)
from cookbook.services.catalog import IngredientCatalog
from cookbook.services.ledger import LikeLedger, TagLedger
from cookbook.services.lookups import require_positive_id, require_recipe
from cookbook.services.search_terms import LIKE_ESCAPE, contains_pattern


def _scalar_fields(recipe: Recipe) -> dict:
    return {
        "id": recipe.id,
        "cookbook_id": recipe.cookbook_id,
        "title": recipe.title,
        "description": recipe.description or "",
        "author": recipe.author or "",
        "photo": recipe.photo,
        "uses": recipe.uses or 0,
        "servings": recipe.servings or 1,
        "created_at": recipe.created_at,
    }


def _matches_values(haystack: list[str], needles: list[str], mode: str) -> bool:
    if not needles:
        return True
    if mode == "AND":
        return all(n in haystack for n in needles)
    return any(n in haystack for n in needles)


class RecipeQueryService:
    """Service for building recipe listing, search and detail views."""

    def __init__(self, db: Session, search_limit: int | None = None):
        self.db = db
        self.search_limit = search_limit or get_settings().search_result_limit
        self.catalog = IngredientCatalog(db)
        self.tags = TagLedger(db)
        self.likes = LikeLedger(db)

    def _base_query(self, cookbook_id: int):
        require_positive_id(cookbook_id, "cookbook id")
        return self.db.query(Recipe).filter(Recipe.cookbook_id == cookbook_id)

    def _summaries(self, recipes: list[Recipe]) -> list[RecipeSummary]:
        # Child collections are fetched for the whole page at once,
        # never per recipe.
        ids = [r.id for r in recipes]
        tags_by = self.tags.names_by_recipe(ids)
        likes_by = self.likes.names_by_recipe(ids)
        ingredients_by = self.catalog.names_by_recipe(ids)

        return [
            RecipeSummary(
                **_scalar_fields(recipe),
                tags=tags_by.get(recipe.id, []),
                likes=likes_by.get(recipe.id, []),
                ingredient_names=ingredients_by.get(recipe.id, []),
            )
            for recipe in recipes
        ]

    def list_recipes(self, cookbook_id: int) -> list[RecipeSummary]:
        """All recipes of a cookbook, by title ignoring case, then id."""
        recipes = (
            self._base_query(cookbook_id).order_by(func.lower(Recipe.title), Recipe.id).all()
        )
        return self._summaries(recipes)

    def search_recipes(self, cookbook_id: int, term: str | None) -> list[RecipeSummary]:
        """Recipes whose title, description, tags, likers or ingredients contain `term`.

        A blank term is the same as list_recipes. Non-blank searches are
        capped at `search_limit` rows and keep the listing order.
        """
        term = (term or "").strip()
        if not term:
            return self.list_recipes(cookbook_id)

        pattern = contains_pattern(term)

        def like(column):
            return func.lower(column).like(pattern, escape=LIKE_ESCAPE)

        tag_match = exists().where(
            RecipeTag.recipe_id == Recipe.id,
            Tag.id == RecipeTag.tag_id,
            like(Tag.name),
        )
        like_match = exists().where(RecipeLike.recipe_id == Recipe.id, like(RecipeLike.name))
        line_match = exists().where(
            RecipeIngredient.recipe_id == Recipe.id, like(RecipeIngredient.line)
        )
        catalog_match = exists().where(
            RecipeIngredient.recipe_id == Recipe.id,
            CatalogIngredient.id == RecipeIngredient.ingredient_id,
            like(CatalogIngredient.name),
        )

        recipes = (
            self._base_query(cookbook_id)
            .filter(
                or_(
                    like(Recipe.title),
                    like(Recipe.description),
                    tag_match,
                    like_match,
                    line_match,
                    catalog_match,
                )
            )
            .order_by(func.lower(Recipe.title), Recipe.id)
            .limit(self.search_limit)
            .all()
        )
        return self._summaries(recipes)

    def get_recipe_detail(self, recipe_id: int) -> RecipeDetail:
        """Full recipe view. Raises RecipeNotFoundError for unknown ids."""
        recipe = require_recipe(self.db, recipe_id)

        ingredient_rows = (
            self.db.query(RecipeIngredient)
            .filter(RecipeIngredient.recipe_id == recipe_id)
            .order_by(RecipeIngredient.position)
            .all()
        )
        ingredients: list[StructuredIngredientLine | IngredientLine] = []
        for row in ingredient_rows:
            if row.name is not None or row.quantity is not None or row.unit is not None:
                ingredients.append(
                    StructuredIngredientLine(
                        line=row.line, quantity=row.quantity, unit=row.unit, name=row.name
                    )
                )
            else:
                ingredients.append(IngredientLine(line=row.line))

        steps = (
            self.db.query(RecipeStep.instruction)
            .filter(RecipeStep.recipe_id == recipe_id)
            .order_by(RecipeStep.position)
            .all()
        )
        note = (
            self.db.query(RecipeNote.content).filter(RecipeNote.recipe_id == recipe_id).scalar()
        )

        return RecipeDetail(
            **_scalar_fields(recipe),
            ingredients=ingredients,
            steps=[instruction for (instruction,) in steps],
            notes=note or "",
            tags=self.tags.names_by_recipe([recipe_id]).get(recipe_id, []),
            likes=self.likes.names_by_recipe([recipe_id]).get(recipe_id, []),
        )

    @staticmethod
    def filter_and_sort(
        summaries: list[RecipeSummary], options: RecipeFilterOptions
    ) -> list[RecipeSummary]:
        """Apply tag/ingredient facet filters and a sort mode to a listing."""
        filtered = [
            s
            for s in summaries
            if _matches_values(s.tags, options.tags, options.tag_mode)
            and _matches_values(s.ingredient_names, options.ingredients, options.ingredient_mode)
        ]
        if options.sort == "ZA":
            return sorted(filtered, key=lambda s: (s.title.lower(), s.id), reverse=True)
        if options.sort == "MOST":
            return sorted(filtered, key=lambda s: (-s.uses, s.title.lower(), s.id))
        return sorted(filtered, key=lambda s: (s.title.lower(), s.id))
