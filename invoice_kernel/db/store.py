"""
Module: invoice_kernel.db.store
Responsibility: The entity store the lifecycle and query engines depend on.
    ``EntityStore`` is the abstract contract; ``SqlEntityStore`` implements
    it over a caller-owned SQLAlchemy ``Session``.
Architecture position: Kernel > DB.  May import from db/, models/ and
    exceptions (SequenceService is imported at call time, services/ import
    this module).  Services and selectors receive an EntityStore by
    constructor injection and never reach for a global session.

Invariants enforced:
    - Flush-only: the store never commits or rolls back.  The caller
      (session_scope() or a test harness) owns the transaction.
    - Row locking: find_invoice(..., for_update=True) issues
      SELECT ... FOR UPDATE so two writers on one invoice serialize.
    - Deterministic ordering: query_invoices orders by id ascending.

Failure modes:
    - StoreUnavailableError wraps OperationalError / InterfaceError.
    - OptimisticLockError wraps StaleDataError (version mismatch at flush).
    - DuplicateInvoiceNumberError wraps a unique-constraint violation on
      (supplier_id, invoice_number).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from invoice_kernel.exceptions import (
    DuplicateInvoiceNumberError,
    OptimisticLockError,
    StoreUnavailableError,
)
from invoice_kernel.logging_config import get_logger
from invoice_kernel.models.invoice import Invoice
from invoice_kernel.models.party import Client, Supplier

logger = get_logger("db.store")


class EntityStore(ABC):
    """
    Keyed collections of invoices, suppliers and clients.

    Contract:
        Lookups return ``None`` when nothing matches; they never raise for
        absence.  Writes are visible to later reads in the same store.
    """

    @abstractmethod
    def find_invoice(self, invoice_id: int, for_update: bool = False) -> Invoice | None:
        ...

    @abstractmethod
    def find_conflicting_invoice_id(self, supplier_pk: int, invoice_number: str) -> int | None:
        """Id of a stored invoice holding (supplier, number), if any."""
        ...

    @abstractmethod
    def save_invoice(self, invoice: Invoice) -> Invoice:
        ...

    @abstractmethod
    def delete_invoice(self, invoice: Invoice) -> None:
        ...

    @abstractmethod
    def query_invoices(
        self,
        predicates: Sequence[Any],
        page: int,
        size: int,
    ) -> tuple[list[Invoice], int]:
        """Return one page of invoices matching all predicates, and the total count."""
        ...

    @abstractmethod
    def find_supplier_by_code(self, code: str) -> Supplier | None:
        ...

    @abstractmethod
    def find_supplier_by_username(self, username: str) -> Supplier | None:
        ...

    @abstractmethod
    def find_client_by_code(self, code: str) -> Client | None:
        ...

    @abstractmethod
    def find_client_by_username(self, username: str) -> Client | None:
        ...

    @abstractmethod
    def save_party(self, party: Supplier | Client) -> Supplier | Client:
        ...

    @abstractmethod
    def next_sequence_value(self, sequence_name: str) -> int:
        ...


class SqlEntityStore(EntityStore):
    """
    EntityStore over a SQLAlchemy session.

    Guarantees:
        - Never calls ``session.commit()`` or ``session.rollback()``.
        - Infrastructure failures surface as kernel exceptions, never as
          raw SQLAlchemy errors.
    """

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except (OperationalError, InterfaceError) as exc:
            logger.error(
                "store_unavailable",
                extra={"operation": operation, "reason": str(exc.orig)},
            )
            raise StoreUnavailableError(operation, str(exc.orig)) from exc

    # -- invoices ----------------------------------------------------------

    def find_invoice(self, invoice_id: int, for_update: bool = False) -> Invoice | None:
        stmt = select(Invoice).where(Invoice.id == invoice_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        with self._guard("find_invoice"):
            return self.session.execute(stmt).scalar_one_or_none()

    def find_conflicting_invoice_id(self, supplier_pk: int, invoice_number: str) -> int | None:
        stmt = select(Invoice.id).where(
            Invoice.supplier_id == supplier_pk,
            Invoice.invoice_number == invoice_number,
        )
        with self._guard("find_conflicting_invoice_id"):
            return self.session.execute(stmt).scalars().first()

    def save_invoice(self, invoice: Invoice) -> Invoice:
        # Read before flush: a failed flush expires loaded state.
        invoice_ref = str(invoice.id)
        supplier_code = invoice.supplier.code if invoice.supplier else str(invoice.supplier_id)
        invoice_number = invoice.invoice_number
        with self._guard("save_invoice"):
            self.session.add(invoice)
            try:
                self.session.flush()
            except StaleDataError as exc:
                raise OptimisticLockError("Invoice", invoice_ref) from exc
            except IntegrityError as exc:
                if _is_invoice_number_collision(exc):
                    raise DuplicateInvoiceNumberError(supplier_code, invoice_number) from exc
                raise
        return invoice

    def delete_invoice(self, invoice: Invoice) -> None:
        invoice_ref = str(invoice.id)
        with self._guard("delete_invoice"):
            self.session.delete(invoice)
            try:
                self.session.flush()
            except StaleDataError as exc:
                raise OptimisticLockError("Invoice", invoice_ref) from exc

    def query_invoices(
        self,
        predicates: Sequence[Any],
        page: int,
        size: int,
    ) -> tuple[list[Invoice], int]:
        count_stmt = select(func.count()).select_from(Invoice).where(*predicates)
        page_stmt = (
            select(Invoice)
            .where(*predicates)
            .order_by(Invoice.id)
            .offset(page * size)
            .limit(size)
        )
        with self._guard("query_invoices"):
            total = self.session.execute(count_stmt).scalar_one()
            items = list(self.session.execute(page_stmt).scalars().all())
        return items, total

    # -- parties -----------------------------------------------------------

    def find_supplier_by_code(self, code: str) -> Supplier | None:
        with self._guard("find_supplier_by_code"):
            return self.session.execute(
                select(Supplier).where(Supplier.code == code)
            ).scalar_one_or_none()

    def find_supplier_by_username(self, username: str) -> Supplier | None:
        with self._guard("find_supplier_by_username"):
            return self.session.execute(
                select(Supplier).where(Supplier.username == username)
            ).scalar_one_or_none()

    def find_client_by_code(self, code: str) -> Client | None:
        with self._guard("find_client_by_code"):
            return self.session.execute(
                select(Client).where(Client.code == code)
            ).scalar_one_or_none()

    def find_client_by_username(self, username: str) -> Client | None:
        with self._guard("find_client_by_username"):
            return self.session.execute(
                select(Client).where(Client.username == username)
            ).scalar_one_or_none()

    def save_party(self, party: Supplier | Client) -> Supplier | Client:
        with self._guard("save_party"):
            self.session.add(party)
            self.session.flush()
        return party

    def next_sequence_value(self, sequence_name: str) -> int:
        from invoice_kernel.services.sequence_service import SequenceService

        with self._guard("next_sequence_value"):
            return SequenceService(self.session).next_value(sequence_name)


def _is_invoice_number_collision(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    # PostgreSQL names the constraint; SQLite names the columns.
    return "uq_invoice_supplier_number" in message or "invoices.invoice_number" in message
