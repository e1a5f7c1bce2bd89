"""Recipe model and its ordered child rows."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from cookbook.database import Base
from cookbook.models.mixins import CreatedAtMixin


class Recipe(Base, CreatedAtMixin):
    """Recipe belonging to exactly one cookbook."""

    __tablename__ = "recipes"
    __table_args__ = (
        CheckConstraint("uses >= 0", name="ck_recipes_uses_non_negative"),
        CheckConstraint("servings > 0", name="ck_recipes_servings_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    cookbook_id = Column(
        Integer, ForeignKey("cookbooks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="", server_default="")
    author = Column(String(255), nullable=False, default="", server_default="")
    photo = Column(Text, nullable=True)  # data URL, opaque to the store
    uses = Column(Integer, nullable=False, default=0, server_default="0")
    servings = Column(Integer, nullable=False, default=1, server_default="1")

    # Relationships
    cookbook = relationship("Cookbook", back_populates="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        order_by="RecipeIngredient.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    steps = relationship(
        "RecipeStep",
        back_populates="recipe",
        order_by="RecipeStep.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    note = relationship(
        "RecipeNote",
        back_populates="recipe",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    likes = relationship(
        "RecipeLike",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class RecipeIngredient(Base):
    """One ingredient line of a recipe, ordered by position."""

    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        UniqueConstraint("recipe_id", "position", name="uq_recipe_ingredient_position"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    line = Column(Text, nullable=False)
    quantity = Column(Float, nullable=True)
    unit = Column(String(100), nullable=True)
    name = Column(String(255), nullable=True)
    position = Column(Integer, nullable=False)
    ingredient_id = Column(
        Integer,
        ForeignKey("ingredient_catalog.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")


class RecipeStep(Base):
    """One instruction step of a recipe, ordered by position."""

    __tablename__ = "recipe_steps"
    __table_args__ = (UniqueConstraint("recipe_id", "position", name="uq_recipe_step_position"),)

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    instruction = Column(Text, nullable=False)
    position = Column(Integer, nullable=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="steps")


class RecipeNote(Base):
    """Free-form notes; at most one row per recipe and never blank."""

    __tablename__ = "recipe_notes"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    content = Column(Text, nullable=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="note")
