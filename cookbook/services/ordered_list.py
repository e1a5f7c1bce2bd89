"""Delete-and-replace writer for position-ordered child rows."""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from sqlalchemy import delete
from sqlalchemy.orm import Session

T = TypeVar("T")


def replace_ordered_rows(
    db: Session,
    model: type[T],
    recipe_id: int,
    rows: Sequence[Mapping[str, Any]],
) -> list[T]:
    """Replace every row of `model` owned by a recipe with `rows`, in order.

    Positions are rewritten as 0..n-1 following the input order. Must run
    inside the caller's transaction: the delete and the inserts are only
    safe together.

    The RuntimeError guard is best-effort. It catches a session with no
    transaction in progress, but since sessions autobegin on their first
    query it cannot prove the caller wrapped the call in transaction().
    """
    if not db.in_transaction():
        raise RuntimeError("replace_ordered_rows must run inside a transaction")

    db.execute(delete(model).where(model.recipe_id == recipe_id))

    created = [
        model(recipe_id=recipe_id, position=position, **row)
        for position, row in enumerate(rows)
    ]
    db.add_all(created)
    db.flush()
    return created
