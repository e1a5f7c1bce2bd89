"""Ordered child row writer tests."""

import pytest

from cookbook.database import SessionLocal, transaction
from cookbook.models.recipe import RecipeIngredient, RecipeStep
from cookbook.services.ordered_list import replace_ordered_rows


def _positions(db, model, recipe_id):
    rows = db.query(model).filter(model.recipe_id == recipe_id).order_by(model.position).all()
    return [(row.position, row.instruction) for row in rows]


def test_replace_assigns_dense_positions(db, recipe):
    """Test that positions follow input order starting at zero."""
    with transaction(db):
        replace_ordered_rows(
            db, RecipeStep, recipe.id, [{"instruction": s} for s in ["Rinse", "Boil", "Rest"]]
        )

    assert _positions(db, RecipeStep, recipe.id) == [(0, "Rinse"), (1, "Boil"), (2, "Rest")]


def test_replace_removes_previous_rows(db, recipe):
    """Test that a second write fully replaces the first."""
    with transaction(db):
        replace_ordered_rows(
            db, RecipeStep, recipe.id, [{"instruction": s} for s in ["One", "Two", "Three"]]
        )
    with transaction(db):
        replace_ordered_rows(db, RecipeStep, recipe.id, [{"instruction": "Only"}])

    assert _positions(db, RecipeStep, recipe.id) == [(0, "Only")]


def test_replace_with_nothing(db, recipe):
    """Test that an empty input clears the rows."""
    with transaction(db):
        replace_ordered_rows(db, RecipeIngredient, recipe.id, [{"line": "rice"}])
    with transaction(db):
        assert replace_ordered_rows(db, RecipeIngredient, recipe.id, []) == []

    assert db.query(RecipeIngredient).count() == 0


def test_failed_write_rolls_back(db, recipe):
    """Test that an error during the write keeps the previous rows."""
    with transaction(db):
        replace_ordered_rows(db, RecipeStep, recipe.id, [{"instruction": "Keep me"}])

    with pytest.raises(RuntimeError):
        with transaction(db):
            replace_ordered_rows(db, RecipeStep, recipe.id, [{"instruction": "Lost"}])
            raise RuntimeError("boom")

    assert _positions(db, RecipeStep, recipe.id) == [(0, "Keep me")]


def test_replace_requires_transaction():
    """Test that the writer refuses a session with no transaction in progress."""
    session = SessionLocal()
    try:
        with pytest.raises(RuntimeError):
            replace_ordered_rows(session, RecipeStep, 1, [{"instruction": "Stir"}])
    finally:
        session.close()
