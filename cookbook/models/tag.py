"""Tag and RecipeTag models."""

from sqlalchemy import Column, ForeignKey, Integer, String

from cookbook.database import Base


class Tag(Base):
    """Free-form label. Names are unique by exact match, case included."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)


class RecipeTag(Base):
    """Link between a recipe and a tag."""

    __tablename__ = "recipe_tags"

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)
