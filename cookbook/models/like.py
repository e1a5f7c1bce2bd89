"""RecipeLike model."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from cookbook.database import Base
from cookbook.models.mixins import CreatedAtMixin


class RecipeLike(Base, CreatedAtMixin):
    """A named person liking a recipe, at most once per name."""

    __tablename__ = "recipe_likes"
    __table_args__ = (UniqueConstraint("recipe_id", "name", name="uq_recipe_like_name"),)

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="likes")
