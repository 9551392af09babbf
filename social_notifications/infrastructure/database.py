"""Database configuration, deadlines and session management."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import logging
import time

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, ORMExecuteState, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

_DEADLINE_KEY = "deadline"


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


class StoreError(Exception):
    """Raised when a store operation fails."""


class OperationTimeout(StoreError):
    """Raised when a store operation runs past its deadline."""


@dataclass
class Deadline:
    """Absolute point in time after which a unit of work must stop."""

    timeout: float
    started_at: float = field(default_factory=time.monotonic)

    @property
    def expires_at(self) -> float:
        return self.started_at + self.timeout

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self) -> None:
        """Raise :class:`OperationTimeout` once the deadline has passed."""

        if self.expired():
            raise OperationTimeout(
                f"store operation exceeded its {self.timeout:g}s deadline"
            )


def _session_deadline(session: Session) -> Deadline | None:
    return session.info.get(_DEADLINE_KEY)


def _check_before_execute(orm_execute_state: ORMExecuteState) -> None:
    deadline = _session_deadline(orm_execute_state.session)
    if deadline is not None:
        deadline.check()


def _check_before_flush(session: Session, _flush_context, _instances) -> None:
    deadline = _session_deadline(session)
    if deadline is not None:
        deadline.check()


def _push_statement_timeout(session: Session, _transaction, connection) -> None:
    """Mirror the remaining budget as a server-side timeout on PostgreSQL."""

    deadline = _session_deadline(session)
    if deadline is None or connection.dialect.name != "postgresql":
        return
    remaining_ms = max(1, int(deadline.remaining() * 1000))
    connection.exec_driver_sql(f"SET LOCAL statement_timeout = {remaining_ms}")


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``."""

    if database_url.startswith("sqlite"):
        options: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            options["poolclass"] = StaticPool
        engine = create_engine(database_url, **options)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(database_url, pool_pre_ping=True)


class Store:
    """Own the engine and hand out sessions bounded by a deadline.

    A single instance is created at process startup and passed to every
    component that touches persisted state.
    """

    def __init__(self, database_url: str | None = None, *, engine: Engine | None = None) -> None:
        if engine is None:
            if not database_url:
                raise ValueError("A database URL or an engine is required")
            engine = build_engine(database_url)
        self.engine = engine
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )
        event.listen(self.session_factory, "do_orm_execute", _check_before_execute)
        event.listen(self.session_factory, "before_flush", _check_before_flush)
        event.listen(self.session_factory, "after_begin", _push_statement_timeout)

    def initialize(self) -> None:
        """Ensure all ORM models have corresponding database tables."""

        from social_notifications.infrastructure import models  # noqa: F401  # ensure models are imported

        Base.metadata.create_all(bind=self.engine, checkfirst=True)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def operation(self, timeout: float) -> Iterator[Session]:
        """Yield a session whose statements must finish within ``timeout`` seconds.

        Store failures inside the block are rolled back and re-raised as
        :class:`StoreError`; an expired deadline surfaces as
        :class:`OperationTimeout`.
        """

        session = self.session_factory()
        session.info[_DEADLINE_KEY] = Deadline(timeout)
        try:
            yield session
        except StoreError:
            session.rollback()
            raise
        except SQLAlchemyError as exc:
            session.rollback()
            deadline = _session_deadline(session)
            if deadline is not None and deadline.expired():
                raise OperationTimeout(str(exc)) from exc
            raise StoreError(str(exc)) from exc
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()


__all__ = [
    "Base",
    "Deadline",
    "OperationTimeout",
    "Store",
    "StoreError",
    "build_engine",
]
