"""Dialect-aware statement helpers shared by repositories."""

from typing import Any

from sqlalchemy import Insert, insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.orm import DeclarativeBase, Session

from learnloop.exceptions import StoreError


def insert_ignore(
    db: Session,
    model: type[DeclarativeBase],
    values: dict[str, Any],
    conflict_columns: list[str],
) -> bool:
    """
    Insert a row unless it collides with a unique constraint.

    Returns:
        True if a row was inserted, False if a conflicting row already existed
    """
    if db.bind is None:
        raise StoreError("Database not bound!")

    stmt: Insert
    if db.bind.dialect.name == "postgresql":
        stmt = pg_insert(model).values(values).on_conflict_do_nothing(
            index_elements=conflict_columns
        )
    else:
        # SQLite
        stmt = insert(model).values(values).prefix_with("OR IGNORE")

    result = db.execute(stmt)
    return result.rowcount == 1  # type: ignore[attr-defined]
