"""
Module: invoice_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors.  Selectors
    form the "Q" side of the CQRS-lite split, providing structured read access
    to invoices without mutation capability.
Architecture position: Kernel > Selectors.  May import from db/, models/ and
    domain/.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only access: selectors only call the store's lookup and query
      methods; they never save or delete.
    - DTO return convention: selectors return frozen view dataclasses, not
      ORM model instances.
"""

from abc import ABC

from invoice_kernel.db.store import EntityStore
from invoice_kernel.domain.clock import Clock, SystemClock


class BaseSelector(ABC):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept an EntityStore from the caller, perform read-only
        queries, and return DTOs.  They take no row locks.
    """

    def __init__(self, store: EntityStore, clock: Clock | None = None):
        """
        Args:
            store: Entity store to read from.
            clock: Time source for date-relative filters.
        """
        self.store = store
        self.clock = clock or SystemClock()
