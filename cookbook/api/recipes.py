"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from cookbook.api.dependencies import get_query_service, get_recipe_service
from cookbook.schemas.cookbook import MAX_ID, NameRequest
from cookbook.schemas.recipe import (
    FilterMode,
    RecipeCreate,
    RecipeCreated,
    RecipeDetail,
    RecipeFilterOptions,
    RecipeSummary,
    RecipeUpdate,
    SortMode,
    UsesResponse,
)
from cookbook.services.query_service import RecipeQueryService
from cookbook.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])

RecipeId = Annotated[int, Path(gt=0, le=MAX_ID)]
CookbookIdQuery = Annotated[int, Query(gt=0, le=MAX_ID)]
Queries = Annotated[RecipeQueryService, Depends(get_query_service)]
Mutations = Annotated[RecipeService, Depends(get_recipe_service)]


# --- Static routes first (before /{recipe_id}) ---


@router.get("", response_model=list[RecipeSummary])
async def list_recipes(
    cookbook_id: CookbookIdQuery,
    queries: Queries,
    tags: Annotated[list[str], Query()] = [],  # noqa: B006
    tag_mode: FilterMode = "OR",
    ingredients: Annotated[list[str], Query()] = [],  # noqa: B006
    ingredient_mode: FilterMode = "OR",
    sort: SortMode = "AZ",
):
    """List recipes in a cookbook, optionally narrowed by tag/ingredient facets."""
    recipes = queries.list_recipes(cookbook_id)
    options = RecipeFilterOptions(
        tags=tags,
        tag_mode=tag_mode,
        ingredients=ingredients,
        ingredient_mode=ingredient_mode,
        sort=sort,
    )
    return queries.filter_and_sort(recipes, options)


@router.get("/search", response_model=list[RecipeSummary])
async def search_recipes(
    cookbook_id: CookbookIdQuery,
    queries: Queries,
    q: Annotated[str | None, Query(max_length=255)] = None,
):
    """Substring search over titles, descriptions, tags, likers and ingredients."""
    return queries.search_recipes(cookbook_id, q)


@router.post("", response_model=RecipeCreated, status_code=status.HTTP_201_CREATED)
async def create_recipe(recipe_data: RecipeCreate, mutations: Mutations):
    """Create a new recipe with ingredients, steps, notes and tags."""
    return RecipeCreated(id=mutations.create_recipe(recipe_data))


# --- Recipe routes ---


@router.get("/{recipe_id}", response_model=RecipeDetail)
async def get_recipe(recipe_id: RecipeId, queries: Queries):
    """Get a recipe with ordered ingredients and steps."""
    return queries.get_recipe_detail(recipe_id)


@router.patch("/{recipe_id}", response_model=RecipeDetail)
async def update_recipe(
    recipe_id: RecipeId,
    recipe_data: RecipeUpdate,
    mutations: Mutations,
    queries: Queries,
):
    """Update only the fields present in the payload."""
    mutations.update_recipe(recipe_id, recipe_data)
    return queries.get_recipe_detail(recipe_id)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: RecipeId, mutations: Mutations):
    """Delete a recipe and all of its ingredients, steps, notes, tags and likes."""
    mutations.delete_recipe(recipe_id)


@router.post("/{recipe_id}/increment-uses", response_model=UsesResponse)
async def increment_uses(recipe_id: RecipeId, mutations: Mutations):
    return UsesResponse(uses=mutations.increment_uses(recipe_id))


@router.post("/{recipe_id}/decrement-uses", response_model=UsesResponse)
async def decrement_uses(recipe_id: RecipeId, mutations: Mutations):
    """Decrement the use counter; stays at zero instead of going negative."""
    return UsesResponse(uses=mutations.decrement_uses(recipe_id))


# --- Tags and likes ---


@router.post("/{recipe_id}/tags", status_code=status.HTTP_204_NO_CONTENT)
async def add_tag(recipe_id: RecipeId, body: NameRequest, mutations: Mutations):
    """Tag a recipe. Tagging twice is not an error."""
    mutations.add_tag(recipe_id, body.name)


@router.delete("/{recipe_id}/tags/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_tag(recipe_id: RecipeId, name: str, mutations: Mutations):
    mutations.remove_tag(recipe_id, name)


@router.post("/{recipe_id}/likes", status_code=status.HTTP_204_NO_CONTENT)
async def add_like(recipe_id: RecipeId, body: NameRequest, mutations: Mutations):
    """Like a recipe by name. Liking twice is not an error."""
    mutations.add_like(recipe_id, body.name)


@router.delete("/{recipe_id}/likes/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_like(recipe_id: RecipeId, name: str, mutations: Mutations):
    mutations.remove_like(recipe_id, name)
