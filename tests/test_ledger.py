"""Tag and like ledger tests."""

import pytest
from sqlalchemy import event

from cookbook.database import engine
from cookbook.models.tag import RecipeTag, Tag
from cookbook.services.exceptions import InvalidInputError, RecipeNotFoundError
from cookbook.services.ledger import LikeLedger, TagLedger
from cookbook.services.recipe_service import RecipeService


def test_add_tag_is_idempotent(db, recipe):
    """Test that tagging twice keeps a single link."""
    ledger = TagLedger(db)

    assert ledger.add_tag(recipe.id, "dinner") is True
    assert ledger.add_tag(recipe.id, "dinner") is False
    db.commit()

    assert db.query(Tag).count() == 1
    assert db.query(RecipeTag).count() == 1


def test_tags_are_case_sensitive(db, recipe):
    """Test that tag identity is an exact match."""
    ledger = TagLedger(db)
    ledger.add_tag(recipe.id, "Dinner")
    ledger.add_tag(recipe.id, "dinner")
    db.commit()

    assert ledger.names_by_recipe([recipe.id]) == {recipe.id: ["Dinner", "dinner"]}
    assert ledger.remove_tag(recipe.id, "DINNER") is False


def test_remove_tag_keeps_vocabulary(db, recipe):
    """Test that unlinking a tag does not delete the tag itself."""
    ledger = TagLedger(db)
    ledger.add_tag(recipe.id, "lunch")

    assert ledger.remove_tag(recipe.id, "lunch") is True
    assert ledger.remove_tag(recipe.id, "lunch") is False
    assert ledger.remove_tag(recipe.id, "never-created") is False
    assert ledger.list_all_tag_names() == ["lunch"]


def test_replace_tags(db, recipe):
    """Test that replacing makes the tag set exactly the given names."""
    ledger = TagLedger(db)
    ledger.add_tag(recipe.id, "old")
    ledger.add_tag(recipe.id, "kept")

    ledger.replace_tags(recipe.id, ["kept", "new", "new"])
    db.commit()

    assert ledger.names_by_recipe([recipe.id])[recipe.id] == ["kept", "new"]


def test_tag_errors(db, recipe):
    """Test blank names and unknown recipes."""
    service = RecipeService(db)
    with pytest.raises(InvalidInputError):
        service.add_tag(recipe.id, "  ")
    with pytest.raises(InvalidInputError):
        service.add_tag(recipe.id, "x" * 256)
    with pytest.raises(RecipeNotFoundError):
        service.add_tag(recipe.id + 1000, "dinner")
    with pytest.raises(InvalidInputError):
        service.remove_tag(0, "dinner")
    assert db.query(Tag).count() == 0


def test_names_by_recipe_batches(db, cookbook):
    """Test grouping names for several recipes at once."""
    from cookbook.models.recipe import Recipe

    first = Recipe(cookbook_id=cookbook.id, title="First")
    second = Recipe(cookbook_id=cookbook.id, title="Second")
    third = Recipe(cookbook_id=cookbook.id, title="Third")
    db.add_all([first, second, third])
    db.flush()

    tags = TagLedger(db)
    tags.add_tag(first.id, "b")
    tags.add_tag(first.id, "A")
    tags.add_tag(second.id, "b")
    likes = LikeLedger(db)
    likes.add_like(second.id, "Zed")
    likes.add_like(second.id, "Amy")
    db.commit()

    ids = [first.id, second.id, third.id]
    assert tags.names_by_recipe(ids) == {first.id: ["A", "b"], second.id: ["b"]}
    assert likes.names_by_recipe(ids) == {second.id: ["Zed", "Amy"]}
    assert tags.names_by_recipe([]) == {}


def test_likes(db, recipe):
    """Test adding and removing likes."""
    ledger = LikeLedger(db)

    assert ledger.add_like(recipe.id, "Alex") is True
    assert ledger.add_like(recipe.id, "Alex") is False
    assert ledger.add_like(recipe.id, "alex") is True
    assert ledger.remove_like(recipe.id, "Alex") is True
    assert ledger.remove_like(recipe.id, "Alex") is False
    db.commit()

    assert ledger.names_by_recipe([recipe.id]) == {recipe.id: ["alex"]}


def test_like_errors(db, recipe):
    """Test blank liker names and unknown recipes."""
    service = RecipeService(db)
    with pytest.raises(InvalidInputError):
        service.add_like(recipe.id, "")
    with pytest.raises(RecipeNotFoundError):
        service.remove_like(recipe.id + 1000, "Alex")


def test_service_looks_up_recipe_once(db, recipe):
    """Test that tag and like mutations check the recipe a single time."""
    service = RecipeService(db)
    recipe_id = recipe.id
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    try:
        assert service.add_tag(recipe_id, " dinner ") is True
        assert service.add_like(recipe_id, "Alex") is True
    finally:
        event.remove(engine, "before_cursor_execute", record)

    recipe_lookups = [s for s in statements if "FROM recipes" in s]
    assert len(recipe_lookups) == 2
    assert TagLedger(db).names_by_recipe([recipe_id]) == {recipe_id: ["dinner"]}
