"""ORM models for the invoice kernel."""

from invoice_kernel.models.invoice import Invoice
from invoice_kernel.models.party import Client, Supplier
from invoice_kernel.models.sequence import SequenceCounter

__all__ = [
    "Client",
    "Invoice",
    "SequenceCounter",
    "Supplier",
]
