"""Cookbook API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from cookbook.api.dependencies import get_cookbook_service
from cookbook.schemas.cookbook import MAX_ID, CookbookCreate, CookbookResponse
from cookbook.services.cookbook_service import CookbookService

router = APIRouter(prefix="/api/v1/cookbooks", tags=["cookbooks"])

CookbookId = Annotated[int, Path(gt=0, le=MAX_ID)]


@router.get("", response_model=list[CookbookResponse])
async def list_cookbooks(
    service: Annotated[CookbookService, Depends(get_cookbook_service)],
):
    """List all cookbooks, oldest first."""
    return service.list_cookbooks()


@router.post("", response_model=CookbookResponse, status_code=status.HTTP_201_CREATED)
async def create_cookbook(
    cookbook_data: CookbookCreate,
    service: Annotated[CookbookService, Depends(get_cookbook_service)],
):
    """Create a new cookbook."""
    return service.create_cookbook(cookbook_data.name)


@router.patch("/{cookbook_id}", response_model=CookbookResponse)
async def rename_cookbook(
    cookbook_id: CookbookId,
    cookbook_data: CookbookCreate,
    service: Annotated[CookbookService, Depends(get_cookbook_service)],
):
    """Rename a cookbook."""
    return service.rename_cookbook(cookbook_id, cookbook_data.name)


@router.delete("/{cookbook_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cookbook(
    cookbook_id: CookbookId,
    service: Annotated[CookbookService, Depends(get_cookbook_service)],
):
    """Delete a cookbook and every recipe in it."""
    service.delete_cookbook(cookbook_id)
