"""Tag API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from cookbook.api.dependencies import get_tag_ledger
from cookbook.services.ledger import TagLedger

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


@router.get("", response_model=list[str])
async def list_tags(ledger: Annotated[TagLedger, Depends(get_tag_ledger)]):
    """List every known tag name, alphabetical ignoring case."""
    return ledger.list_all_tag_names()
