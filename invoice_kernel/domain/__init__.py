"""Pure domain layer for the invoice kernel: no I/O, no ORM imports."""

from invoice_kernel.domain.actors import Caller, CallerRole
from invoice_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from invoice_kernel.domain.criteria import InvoiceSearchCriteria, Page, PageRequest
from invoice_kernel.domain.lifecycle import (
    INVOICE_TRANSITIONS,
    TERMINAL_INVOICE_STATUSES,
    CurrencyType,
    InvoiceStatus,
    LifecyclePolicy,
    can_transition,
)
from invoice_kernel.domain.views import (
    BankInvoiceView,
    ClientInvoiceView,
    ClientRef,
    SupplierInvoiceView,
    SupplierRef,
    project_invoice,
)

__all__ = [
    "BankInvoiceView",
    "Caller",
    "CallerRole",
    "ClientInvoiceView",
    "ClientRef",
    "Clock",
    "CurrencyType",
    "DeterministicClock",
    "INVOICE_TRANSITIONS",
    "InvoiceSearchCriteria",
    "InvoiceStatus",
    "LifecyclePolicy",
    "Page",
    "PageRequest",
    "SupplierInvoiceView",
    "SupplierRef",
    "SystemClock",
    "TERMINAL_INVOICE_STATUSES",
    "can_transition",
    "project_invoice",
]
