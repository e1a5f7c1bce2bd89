"""Database configuration, session management and schema bootstrap."""

import logging
import sqlite3
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import Column, Float, Integer, String, create_engine, event, func, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from cookbook.config import get_settings
from cookbook.services.exceptions import SchemaBootstrapError

logger = logging.getLogger(__name__)

settings = get_settings()


def _engine_options(database_url: str) -> dict[str, Any]:
    if database_url.startswith("sqlite"):
        database = make_url(database_url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


@event.listens_for(Engine, "connect")
def _configure_sqlite(dbapi_connection, connection_record) -> None:
    """Enable cascading foreign keys and WAL journaling on SQLite connections."""
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a unit of work that either commits as a whole or rolls back.

    Usage:
        with transaction(db):
            db.add(...)
    """
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning(f"Rolled back transaction: {e!r}")
        raise


# Columns added after the first schema release. Built fresh on every call
# because alembic binds each Column to a throwaway Table.
def _additive_columns() -> dict[str, list[Column]]:
    return {
        "recipes": [
            Column("servings", Integer, nullable=True, server_default=text("1")),
        ],
        "recipe_ingredients": [
            Column("quantity", Float, nullable=True),
            Column("unit", String(100), nullable=True),
            Column("name", String(255), nullable=True),
            Column("ingredient_id", Integer, nullable=True),
        ],
    }


def _is_duplicate_column(error: DBAPIError) -> bool:
    message = str(error.orig).lower()
    return "duplicate column" in message or "already exists" in message


def ensure_columns(
    bind: Engine,
    columns: Callable[[], dict[str, list[Column]]] = _additive_columns,
) -> list[str]:
    """Add missing columns to existing tables without touching stored rows.

    Returns the qualified names of the columns that were added. Any failure
    other than the column already existing raises SchemaBootstrapError.
    """
    added = []
    for table_name, table_columns in columns().items():
        existing = {col["name"] for col in inspect(bind).get_columns(table_name)}
        for column in table_columns:
            if column.name in existing:
                continue
            try:
                with bind.begin() as conn:
                    Operations(MigrationContext.configure(conn)).add_column(table_name, column)
            except DBAPIError as e:
                if _is_duplicate_column(e):
                    logger.info(f"Column {table_name}.{column.name} already exists")
                    continue
                logger.error(f"Failed to add column {table_name}.{column.name}: {e}")
                raise SchemaBootstrapError(
                    f"Could not add column {table_name}.{column.name}"
                ) from e
            logger.info(f"Added column {table_name}.{column.name}")
            added.append(f"{table_name}.{column.name}")
    return added


def seed_default_cookbook(db: Session, name: str | None = None) -> bool:
    """Create the default cookbook when no cookbook exists. Returns True if seeded."""
    from cookbook.models.cookbook import Cookbook

    if db.query(func.count(Cookbook.id)).scalar():
        return False
    with transaction(db):
        db.add(Cookbook(name=name or settings.default_cookbook_name))
    logger.info("Seeded default cookbook")
    return True


def init_db(bind: Engine | None = None) -> None:
    """Create tables, backfill additive columns and seed the default cookbook."""
    # Import all models here so they are registered with Base.metadata
    from cookbook import models  # noqa: F401

    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind)
    except DBAPIError as e:
        logger.error(f"Failed to create tables: {e}")
        raise SchemaBootstrapError("Could not create tables") from e
    ensure_columns(bind)

    db = Session(bind=bind, autoflush=False)
    try:
        seed_default_cookbook(db)
    finally:
        db.close()
