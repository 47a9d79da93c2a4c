"""Services for the invoice kernel (write side)."""

from invoice_kernel.services.invoice_service import InvoiceService
from invoice_kernel.services.party_service import PartyInfo, PartyService, PartyType
from invoice_kernel.services.sequence_service import SequenceService

__all__ = [
    "InvoiceService",
    "PartyInfo",
    "PartyService",
    "PartyType",
    "SequenceService",
]
