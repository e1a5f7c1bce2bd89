"""Cookbook create/rename/delete and listing."""

import logging

from sqlalchemy import delete
from sqlalchemy.orm import Session

from cookbook.database import transaction
from cookbook.models.cookbook import Cookbook
from cookbook.services.exceptions import CookbookNotFoundError
from cookbook.services.lookups import clean_name, require_cookbook, require_positive_id

logger = logging.getLogger(__name__)


class CookbookService:
    """Service for cookbook operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_cookbooks(self) -> list[Cookbook]:
        """All cookbooks, oldest first."""
        return self.db.query(Cookbook).order_by(Cookbook.created_at, Cookbook.id).all()

    def create_cookbook(self, name: str) -> Cookbook:
        name = clean_name(name, "Cookbook name")
        with transaction(self.db):
            cookbook = Cookbook(name=name)
            self.db.add(cookbook)
        self.db.refresh(cookbook)
        logger.info(f"Created cookbook {cookbook.id}")
        return cookbook

    def rename_cookbook(self, cookbook_id: int, name: str) -> Cookbook:
        name = clean_name(name, "Cookbook name")
        cookbook = require_cookbook(self.db, cookbook_id)
        with transaction(self.db):
            cookbook.name = name
        self.db.refresh(cookbook)
        return cookbook

    def delete_cookbook(self, cookbook_id: int) -> None:
        """Delete a cookbook together with all of its recipes and their rows."""
        require_positive_id(cookbook_id, "cookbook id")
        with transaction(self.db):
            deleted = self.db.execute(delete(Cookbook).where(Cookbook.id == cookbook_id)).rowcount
        if not deleted:
            raise CookbookNotFoundError(cookbook_id)
        logger.info(f"Deleted cookbook {cookbook_id}")
