"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor for every write-side service in the
    kernel: an injected ``EntityStore`` and an injected ``Clock``.

Architecture position:
    Kernel > Services -- imperative shell.  Every service in
    ``invoice_kernel/services/`` that performs write operations extends
    this class.

Invariants enforced:
    Transaction boundaries: services persist through the store, which
    flushes within the caller's transaction and never commits or rolls
    back.  The caller owns commit/rollback.
"""

from abc import ABC

from invoice_kernel.db.store import EntityStore
from invoice_kernel.domain.clock import Clock, SystemClock


class BaseService(ABC):
    """
    Abstract base class for all kernel services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide search methods -- those belong in
          ``invoice_kernel/selectors/``.
    """

    def __init__(self, store: EntityStore, clock: Clock | None = None):
        """
        Initialize the service.

        Args:
            store: Entity store for all reads and writes.
            clock: Time source; defaults to the system clock.
        """
        self.store = store
        self.clock = clock or SystemClock()
