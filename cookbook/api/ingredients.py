"""Ingredient suggestion API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cookbook.api.dependencies import get_ingredient_catalog
from cookbook.schemas.cookbook import MAX_ID
from cookbook.services.catalog import IngredientCatalog

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


@router.get("", response_model=list[str])
async def list_ingredient_suggestions(
    catalog: Annotated[IngredientCatalog, Depends(get_ingredient_catalog)],
    cookbook_id: Annotated[int | None, Query(gt=0, le=MAX_ID)] = None,
    q: Annotated[str | None, Query(max_length=255)] = None,
    limit: Annotated[int | None, Query(gt=0, le=1000)] = None,
):
    """Catalogued ingredient names for autocomplete, each at most once."""
    return catalog.suggestions(cookbook_id=cookbook_id, query=q, limit=limit)
