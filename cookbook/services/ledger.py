"""Tag and like bookkeeping for recipes."""

import logging
from collections import defaultdict

from sqlalchemy import func
from sqlalchemy.orm import Session

from cookbook.models.like import RecipeLike
from cookbook.models.tag import RecipeTag, Tag

logger = logging.getLogger(__name__)


def _group_names(rows) -> dict[int, list[str]]:
    grouped: dict[int, list[str]] = defaultdict(list)
    for recipe_id, name in rows:
        if name not in grouped[recipe_id]:
            grouped[recipe_id].append(name)
    return dict(grouped)


class TagLedger:
    """Unique tag names and their links to recipes.

    Tag identity is exact-match: "Dinner" and "dinner" are different tags.
    Callers pass trimmed names for recipes they have already looked up.
    """

    def __init__(self, db: Session):
        self.db = db

    def add_tag(self, recipe_id: int, name: str) -> bool:
        """Link a tag to a recipe, creating the tag if needed.

        Returns False when the link already existed.
        """

        tag = self.db.query(Tag).filter(Tag.name == name).first()
        if not tag:
            tag = Tag(name=name)
            self.db.add(tag)
            self.db.flush()  # Get tag.id

        link = (
            self.db.query(RecipeTag)
            .filter(RecipeTag.recipe_id == recipe_id, RecipeTag.tag_id == tag.id)
            .first()
        )
        if link:
            return False
        self.db.add(RecipeTag(recipe_id=recipe_id, tag_id=tag.id))
        self.db.flush()
        return True

    def remove_tag(self, recipe_id: int, name: str) -> bool:
        """Unlink a tag from a recipe. Returns False when it was not linked."""

        tag = self.db.query(Tag).filter(Tag.name == name).first()
        if not tag:
            return False
        removed = (
            self.db.query(RecipeTag)
            .filter(RecipeTag.recipe_id == recipe_id, RecipeTag.tag_id == tag.id)
            .delete()
        )
        return removed > 0

    def replace_tags(self, recipe_id: int, names: list[str]) -> None:
        """Make the recipe's tag set exactly `names`."""
        self.db.query(RecipeTag).filter(RecipeTag.recipe_id == recipe_id).delete()
        for name in names:
            self.add_tag(recipe_id, name)

    def list_all_tag_names(self) -> list[str]:
        """Every known tag name, alphabetical ignoring case."""
        rows = self.db.query(Tag.name).order_by(func.lower(Tag.name), Tag.name).all()
        return [name for (name,) in rows]

    def names_by_recipe(self, recipe_ids: list[int]) -> dict[int, list[str]]:
        """Tag names per recipe for a whole page of recipes in one query."""
        if not recipe_ids:
            return {}
        rows = (
            self.db.query(RecipeTag.recipe_id, Tag.name)
            .join(Tag, Tag.id == RecipeTag.tag_id)
            .filter(RecipeTag.recipe_id.in_(recipe_ids))
            .order_by(RecipeTag.recipe_id, func.lower(Tag.name), Tag.name)
            .all()
        )
        return _group_names(rows)


class LikeLedger:
    """Per-recipe set of liker names."""

    def __init__(self, db: Session):
        self.db = db

    def add_like(self, recipe_id: int, name: str) -> bool:
        """Record that `name` likes a recipe. Returns False if already recorded."""

        existing = (
            self.db.query(RecipeLike)
            .filter(RecipeLike.recipe_id == recipe_id, RecipeLike.name == name)
            .first()
        )
        if existing:
            return False
        self.db.add(RecipeLike(recipe_id=recipe_id, name=name))
        self.db.flush()
        return True

    def remove_like(self, recipe_id: int, name: str) -> bool:
        """Drop a like. Returns False when there was nothing to drop."""

        removed = (
            self.db.query(RecipeLike)
            .filter(RecipeLike.recipe_id == recipe_id, RecipeLike.name == name)
            .delete()
        )
        return removed > 0

    def names_by_recipe(self, recipe_ids: list[int]) -> dict[int, list[str]]:
        """Liker names per recipe, first like first, in one query."""
        if not recipe_ids:
            return {}
        rows = (
            self.db.query(RecipeLike.recipe_id, RecipeLike.name)
            .filter(RecipeLike.recipe_id.in_(recipe_ids))
            .order_by(RecipeLike.recipe_id, RecipeLike.created_at, RecipeLike.id)
            .all()
        )
        return _group_names(rows)
