"""
Role-specific invoice read shapes (``invoice_kernel.domain.views``).

Responsibility
--------------
Maps a persisted invoice plus its linked supplier/client into the shape a
caller of a given role is allowed to see:

* Bank     -- full detail, both counterparties, owner and timestamps.
* Client   -- invoice detail plus the supplier.
* Supplier -- invoice detail plus the client (absent until linked).

No business rules live here beyond picking the shape.

Architecture position
---------------------
**Kernel domain layer** -- pure.  Reads invoice records through the
``InvoiceRecord`` protocol, so ORM rows and test doubles project alike.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from invoice_kernel.domain.actors import CallerRole
from invoice_kernel.domain.lifecycle import CurrencyType, InvoiceStatus


class PartyRecord(Protocol):
    code: str
    name: str


class InvoiceRecord(Protocol):
    id: int
    invoice_number: str
    invoice_date: date
    amount: Decimal
    currency: CurrencyType
    status: InvoiceStatus
    owner_identity: str
    created_at: datetime | None
    updated_at: datetime | None
    supplier: PartyRecord
    client: PartyRecord | None


@dataclass(frozen=True)
class SupplierRef:
    supplier_id: str
    name: str


@dataclass(frozen=True)
class ClientRef:
    client_id: str
    name: str


@dataclass(frozen=True)
class ClientInvoiceView:
    invoice_id: int
    invoice_number: str
    invoice_date: date
    amount: Decimal
    currency_type: CurrencyType
    status: InvoiceStatus
    supplier: SupplierRef


@dataclass(frozen=True)
class SupplierInvoiceView:
    invoice_id: int
    invoice_number: str
    invoice_date: date
    amount: Decimal
    currency_type: CurrencyType
    status: InvoiceStatus
    client: ClientRef | None


@dataclass(frozen=True)
class BankInvoiceView:
    invoice_id: int
    invoice_number: str
    invoice_date: date
    amount: Decimal
    currency_type: CurrencyType
    status: InvoiceStatus
    supplier: SupplierRef
    client: ClientRef | None
    owner_identity: str
    created_at: datetime | None
    updated_at: datetime | None


InvoiceView = BankInvoiceView | ClientInvoiceView | SupplierInvoiceView


def _supplier_ref(invoice: InvoiceRecord) -> SupplierRef:
    return SupplierRef(supplier_id=invoice.supplier.code, name=invoice.supplier.name)


def _client_ref(invoice: InvoiceRecord) -> ClientRef | None:
    if invoice.client is None:
        return None
    return ClientRef(client_id=invoice.client.code, name=invoice.client.name)


def to_bank_view(invoice: InvoiceRecord) -> BankInvoiceView:
    return BankInvoiceView(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        invoice_date=invoice.invoice_date,
        amount=invoice.amount,
        currency_type=invoice.currency,
        status=invoice.status,
        supplier=_supplier_ref(invoice),
        client=_client_ref(invoice),
        owner_identity=invoice.owner_identity,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def to_client_view(invoice: InvoiceRecord) -> ClientInvoiceView:
    return ClientInvoiceView(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        invoice_date=invoice.invoice_date,
        amount=invoice.amount,
        currency_type=invoice.currency,
        status=invoice.status,
        supplier=_supplier_ref(invoice),
    )


def to_supplier_view(invoice: InvoiceRecord) -> SupplierInvoiceView:
    return SupplierInvoiceView(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        invoice_date=invoice.invoice_date,
        amount=invoice.amount,
        currency_type=invoice.currency,
        status=invoice.status,
        client=_client_ref(invoice),
    )


def project_invoice(invoice: InvoiceRecord, role: CallerRole) -> InvoiceView:
    """Render ``invoice`` in the shape visible to ``role``."""
    if role is CallerRole.BANK:
        return to_bank_view(invoice)
    if role is CallerRole.CLIENT:
        return to_client_view(invoice)
    if role is CallerRole.SUPPLIER:
        return to_supplier_view(invoice)
    raise ValueError(f"Unhandled caller role: {role!r}")
