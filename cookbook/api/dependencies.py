"""FastAPI dependencies for services and database."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from cookbook.database import get_db
from cookbook.services.catalog import IngredientCatalog
from cookbook.services.cookbook_service import CookbookService
from cookbook.services.ledger import TagLedger
from cookbook.services.query_service import RecipeQueryService
from cookbook.services.recipe_service import RecipeService


def get_cookbook_service(db: Annotated[Session, Depends(get_db)]) -> CookbookService:
    """Get cookbook service with dependencies."""
    return CookbookService(db)


def get_recipe_service(db: Annotated[Session, Depends(get_db)]) -> RecipeService:
    """Get recipe mutation service with dependencies."""
    return RecipeService(db)


def get_query_service(db: Annotated[Session, Depends(get_db)]) -> RecipeQueryService:
    """Get recipe query service with dependencies."""
    return RecipeQueryService(db)


def get_tag_ledger(db: Annotated[Session, Depends(get_db)]) -> TagLedger:
    return TagLedger(db)


def get_ingredient_catalog(db: Annotated[Session, Depends(get_db)]) -> IngredientCatalog:
    return IngredientCatalog(db)
