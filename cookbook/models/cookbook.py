"""Cookbook model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from cookbook.database import Base
from cookbook.models.mixins import CreatedAtMixin


class Cookbook(Base, CreatedAtMixin):
    """A named collection of recipes."""

    __tablename__ = "cookbooks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    recipes = relationship(
        "Recipe",
        back_populates="cookbook",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
