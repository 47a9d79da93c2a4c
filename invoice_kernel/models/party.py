"""
Module: invoice_kernel.models.party
Responsibility: ORM persistence for the two counterparties of an invoice:
    suppliers (creditors) and clients (debtors).  Each row links a business
    code (SP_00001 / CL_00001) to the caller identity (username) that acts
    for it.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - code is unique per table and never changes once allocated.
    - username is unique per table; it is how a caller identity resolves to
      a supplier record (supplier search scope) or a client record (client
      linkage on invoice creation).

Failure modes:
    - IntegrityError on duplicate code or username.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from invoice_kernel.db.base import TrackedBase


class PartyBase(TrackedBase):
    """Columns shared by suppliers and clients."""

    __abstract__ = True

    # Business identifier (SP_00001 / CL_00001)
    code: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
    )

    # Caller identity acting for this party
    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    contact_number: Mapped[str | None] = mapped_column(
        String(30),
        nullable=True,
    )


class Supplier(PartyBase):
    """Creditor attached to invoices.  Never mutated by the invoice lifecycle."""

    __tablename__ = "suppliers"

    def __repr__(self) -> str:
        return f"<Supplier {self.code}: {self.name}>"


class Client(PartyBase):
    """Debtor who raises invoices against suppliers."""

    __tablename__ = "clients"

    def __repr__(self) -> str:
        return f"<Client {self.code}: {self.name}>"
