"""
Module: pulse_kernel.db.engine
Responsibility: The one place a SQLAlchemy engine and session factory are
    built.  Scripts call ``init_engine_from_url`` once with the configured
    URL; services never see the engine, only the ``Session`` they are given.
Architecture position: Kernel > DB.  Imports nothing from outer layers except
    the module ORM registry, lazily, inside ``create_tables``.

Invariants enforced:
    - Sessions are built with ``expire_on_commit=False`` so DTOs can be read
      off ORM rows after the transaction ends.
    - In-memory SQLite URLs share a single connection (``StaticPool``);
      otherwise every session would see its own empty database.

Failure modes:
    - RuntimeError from ``get_engine``/``get_session`` before initialization.
"""

from __future__ import annotations

import atexit
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pulse_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(
    database_url: str,
    pool_size: int,
    max_overflow: int,
    pool_recycle: int,
) -> dict[str, Any]:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": pool_recycle,
    }


def init_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_size: int = 10,
    max_overflow: int = 5,
    pool_recycle: int = 1800,
) -> Engine:
    """
    Build the process-wide engine and session factory.

    A second call replaces the first; the old engine is disposed.

    Args:
        database_url: Any SQLAlchemy URL, e.g. ``postgresql://host/pulse`` or
            ``sqlite:///:memory:``.
        echo: Log every SQL statement through SQLAlchemy's logger.
        pool_size, max_overflow, pool_recycle: Pool settings, ignored for
            SQLite.
    """
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()

    _engine = create_engine(
        database_url,
        echo=echo,
        **_engine_options(database_url, pool_size, max_overflow, pool_recycle),
    )
    _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)

    configure_logging()
    logger.info(
        "engine_initialized",
        extra={"dialect": _engine.dialect.name, "pool_size": pool_size, "echo": echo},
    )
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


def get_session() -> Session:
    """A new session from the process-wide factory."""
    if _session_factory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _session_factory()


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Session that commits on success and rolls back on any exception.

    The exception is re-raised after rollback; the session is always closed.

    Usage:
        with session_scope() as session:
            session.add(ProjectModel(name="Apollo", created_by_id=actor_id))
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create every kernel and module table on the current engine."""
    from pulse_kernel.db.base import Base
    from pulse_modules._orm_registry import import_all_orm_models

    import_all_orm_models()
    Base.metadata.create_all(get_engine())
    logger.info("tables_created", extra={"table_count": len(Base.metadata.tables)})


def reset_engine() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


atexit.register(reset_engine)
