"""
SQL utilities for consistent handling of query results.

SQLModel/SQLAlchemy may return COUNT results as int or as a 1-tuple/Row.
Use scalar_int() to safely coerce to int everywhere.
"""
from typing import Any

from fastapi import HTTPException
from sqlalchemy import func
from sqlmodel import Session, select

from community_api.utils.timeutil import as_naive_utc


def scalar_int(x: Any) -> int:
    """Convert COUNT/aggregate result to int. Handles int or 1-tuple/Row."""
    try:
        return int(x[0])
    except (TypeError, IndexError):
        return int(x)


def count_rows(session: Session, statement) -> int:
    """COUNT(*) over an arbitrary select, ignoring its ORDER BY/LIMIT."""
    subquery = statement.order_by(None).limit(None).offset(None).subquery()
    return scalar_int(session.exec(select(func.count()).select_from(subquery)).one())


def contains_ci(column, needle: str):
    """Case-insensitive substring match that works on SQLite and Postgres."""
    return func.lower(column).contains(needle.lower())


def live_row_or_404(session: Session, model, row_id: str, label: str):
    """Fetch a row by id, treating soft-deleted rows as missing."""
    row = session.get(model, row_id)
    if row is None or getattr(row, "deleted_at", None) is not None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return row


def apply_date_range(statement, column, start=None, end=None):
    """Restrict ``column`` to [start, end]; either bound may be omitted."""
    if start is not None:
        statement = statement.where(column >= as_naive_utc(start))
    if end is not None:
        statement = statement.where(column <= as_naive_utc(end))
    return statement
