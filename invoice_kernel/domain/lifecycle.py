"""
Invoice lifecycle types (``invoice_kernel.domain.lifecycle``).

Responsibility
--------------
Pure value objects for the invoice state machine: status and currency
enumerations, the transition table, and the ``LifecyclePolicy`` tunables
(expiry threshold, paging limits).

Architecture position
---------------------
**Kernel domain layer** -- ZERO I/O.  No imports from ``db/``,
``services/``, ``selectors/``, or outer layers.

Invariants enforced
-------------------
* ``INVOICE_TRANSITIONS`` lists the statuses each status may move to.
  The bank sets a status directly rather than stepping, so every
  non-terminal status may move to any status; terminal statuses have
  no outgoing edges.
* Only ``PENDING`` invoices are editable or deletable by their owner.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states."""

    PENDING = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CurrencyType(str, Enum):
    """Currencies an invoice may be raised in."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


TERMINAL_INVOICE_STATUSES: frozenset[InvoiceStatus] = frozenset({
    InvoiceStatus.APPROVED,
    InvoiceStatus.REJECTED,
})

EDITABLE_INVOICE_STATUSES: frozenset[InvoiceStatus] = frozenset({
    InvoiceStatus.PENDING,
})

INVOICE_TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    status: (
        frozenset()
        if status in TERMINAL_INVOICE_STATUSES
        else frozenset(InvoiceStatus)
    )
    for status in InvoiceStatus
}


def can_transition(current: InvoiceStatus) -> bool:
    """True if an invoice in ``current`` may still change status."""
    return bool(INVOICE_TRANSITIONS[current])


def is_editable(status: InvoiceStatus) -> bool:
    """True if the owning client may still edit or delete the invoice."""
    return status in EDITABLE_INVOICE_STATUSES


@dataclass(frozen=True)
class LifecyclePolicy:
    """Tunables for the lifecycle and query engines.

    ``expiry_days``: an invoice whose age exceeds this many days can no
    longer have its status changed.
    ``default_page_size`` / ``max_page_size``: paging for searches.
    """

    expiry_days: int = 30
    default_page_size: int = 10
    max_page_size: int = 100

    def __post_init__(self) -> None:
        if self.expiry_days < 0:
            raise ValueError(f"expiry_days must be >= 0, got {self.expiry_days}")
        if self.default_page_size < 1:
            raise ValueError(
                f"default_page_size must be >= 1, got {self.default_page_size}"
            )
        if self.max_page_size < self.default_page_size:
            raise ValueError(
                "max_page_size must be >= default_page_size "
                f"({self.max_page_size} < {self.default_page_size})"
            )
