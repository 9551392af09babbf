"""Conflict-safe insert helpers shared by the repositories."""

from __future__ import annotations

from typing import Any

from sqlalchemy import insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session


def insert_ignoring_conflicts(session: Session, target: Any, values: dict[str, Any]):
    """Return an ``INSERT ... ON CONFLICT DO NOTHING`` statement for ``target``.

    Only PostgreSQL and SQLite support the clause; ``None`` is returned for
    other dialects.
    """

    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(target).values(**values).on_conflict_do_nothing()
    if dialect == "sqlite":
        return sqlite.insert(target).values(**values).on_conflict_do_nothing()
    return None


def execute_insert_ignoring_conflicts(
    session: Session, model: type, values: dict[str, Any]
) -> int:
    """Insert ``values`` unless they clash with a unique key; return rows inserted."""

    table = model.__table__
    statement = insert_ignoring_conflicts(session, table, values)
    if statement is not None:
        return session.execute(statement).rowcount or 0

    savepoint = session.begin_nested()
    try:
        session.execute(insert(table).values(**values))
    except IntegrityError:
        savepoint.rollback()
        return 0
    savepoint.commit()
    return 1


__all__ = ["execute_insert_ignoring_conflicts", "insert_ignoring_conflicts"]
