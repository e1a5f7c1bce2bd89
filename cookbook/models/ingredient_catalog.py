"""Ingredient catalog model."""

from sqlalchemy import Column, Integer, String

from cookbook.database import Base
from cookbook.models.mixins import CreatedAtMixin


class CatalogIngredient(Base, CreatedAtMixin):
    """Canonical spelling of an ingredient name, unique case-insensitively."""

    __tablename__ = "ingredient_catalog"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)  # First-inserted spelling
    normalized_name = Column(String(255), nullable=False, unique=True)  # Lowercase, trimmed
