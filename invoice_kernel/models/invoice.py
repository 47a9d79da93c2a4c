"""
Module: invoice_kernel.models.invoice
Responsibility: ORM persistence for invoices.
Architecture position: Kernel > Models.  May import from db/base.py, sibling
    models, and the pure domain enums.

Invariants enforced:
    - (supplier_id, invoice_number) is unique (uq_invoice_supplier_number).
    - status defaults to PENDING on insert.
    - version is an optimistic-lock counter: every UPDATE/DELETE is
      qualified by the version read, so a writer holding a stale row fails
      with StaleDataError instead of overwriting a concurrent change.
    - client_id is nullable; an invoice raised by an identity with no client
      record carries no client.

Failure modes:
    - IntegrityError on a (supplier_id, invoice_number) collision that slipped
      past the uniqueness rule (concurrent creates).
    - StaleDataError on a version mismatch at flush.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Enum, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoice_kernel.db.base import TrackedBase
from invoice_kernel.domain.lifecycle import CurrencyType, InvoiceStatus
from invoice_kernel.models.party import Client, Supplier


class Invoice(TrackedBase):
    """
    An invoice raised by a client against a supplier.

    Contract:
        owner_identity is the caller identity that created the invoice and
        is the only identity allowed to edit or delete it.  Only the bank
        changes status.
    """

    __tablename__ = "invoices"

    __table_args__ = (
        UniqueConstraint("supplier_id", "invoice_number", name="uq_invoice_supplier_number"),
        Index("idx_invoice_owner", "owner_identity"),
        Index("idx_invoice_status", "status"),
        Index("idx_invoice_date", "invoice_date"),
    )

    invoice_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    supplier_id: Mapped[int] = mapped_column(
        ForeignKey("suppliers.id"),
        nullable=False,
    )

    client_id: Mapped[int | None] = mapped_column(
        ForeignKey("clients.id"),
        nullable=True,
    )

    invoice_date: Mapped[date] = mapped_column(
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(
        nullable=False,
    )

    currency: Mapped[CurrencyType] = mapped_column(
        Enum(CurrencyType, native_enum=False, length=3),
        nullable=False,
    )

    status: Mapped[InvoiceStatus] = mapped_column(
        Enum(InvoiceStatus, native_enum=False, length=20),
        nullable=False,
        default=InvoiceStatus.PENDING,
    )

    owner_identity: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    supplier: Mapped[Supplier] = relationship(lazy="selectin")
    client: Mapped[Client | None] = relationship(lazy="selectin")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Invoice {self.id}: {self.invoice_number} ({self.status.value})>"
