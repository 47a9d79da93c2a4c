"""Database layer - engine, transaction scope and base classes.

The entity store lives in ``invoice_kernel.db.store``; it depends on the
models and is imported from there directly.
"""

from invoice_kernel.db.base import Base, TrackedBase
from invoice_kernel.db.engine import create_tables, init_engine_from_url, session_scope

__all__ = [
    "init_engine_from_url",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
]
