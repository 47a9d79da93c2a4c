"""Selectors for the invoice kernel (read side)."""

from invoice_kernel.selectors.invoice_selector import (
    InvoiceSelector,
    build_criteria_predicates,
    build_scope_predicates,
)

__all__ = [
    "InvoiceSelector",
    "build_criteria_predicates",
    "build_scope_predicates",
]
