"""
Module: invoice_kernel.db.engine
Responsibility: Own the process-wide engine and hand out transactional
    sessions for the lifecycle and query engines.
Architecture position: Kernel > DB.  May import from db/base.py and, inside
    create_tables(), the models package so the metadata is complete.

Invariants enforced:
    - PostgreSQL connections run at READ COMMITTED; invoice writers take
      row locks (FOR UPDATE) through the store.
    - SQLite uses one shared connection (StaticPool), so every session on
      an in-memory database sees the same tables.
    - session_scope() is the only place that commits or rolls back.

Failure modes:
    - RuntimeError from session_scope()/create_tables()/drop_tables() when
      init_engine_from_url() has not run.
"""

import atexit
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from invoice_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_sessions: sessionmaker[Session] | None = None


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 10,
        "max_overflow": 5,
        "pool_pre_ping": True,
        "isolation_level": "READ COMMITTED",
    }


def init_engine_from_url(database_url: str, echo: bool = False) -> Engine:
    """
    Create the engine and session factory for ``database_url``.

    Replaces any engine created by an earlier call.  ``expire_on_commit`` is
    off so views built inside a scope stay readable after it commits.
    """
    global _engine, _sessions

    reset_engine()
    _engine = create_engine(database_url, echo=echo, **_engine_options(database_url))
    _sessions = sessionmaker(bind=_engine, expire_on_commit=False)

    configure_logging()
    logger.info(
        "engine_initialized",
        extra={"dialect": _engine.dialect.name, "echo": echo},
    )
    return _engine


def _require_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    One unit of work: commit on normal exit, roll back on any exception.

    Usage:
        with session_scope() as session:
            service = InvoiceService(SqlEntityStore(session), clock, policy)
            service.update_status(invoice_id, InvoiceStatus.APPROVED, caller)
    """
    _require_engine()
    session = _sessions()
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    from invoice_kernel.db.base import Base
    import invoice_kernel.models  # noqa: F401

    Base.metadata.create_all(_require_engine())


def drop_tables() -> None:
    """Drop every kernel table. Test teardown only."""
    from invoice_kernel.db.base import Base

    Base.metadata.drop_all(_require_engine())


def reset_engine() -> None:
    global _engine, _sessions

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _sessions = None


atexit.register(reset_engine)
