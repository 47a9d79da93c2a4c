"""
InvoiceService -- the invoice lifecycle engine.

Responsibility:
    Orchestrates create / update / status-change / delete.  Each operation
    loads the entities it needs through the EntityStore, runs the pure
    validation rules against current state and the caller, mutates, and
    persists.  Results are rendered through the view projector.

Architecture position:
    Kernel > Services -- imperative shell around ``domain.rules``.

Invariants enforced:
    - New invoices start PENDING and are owned by the creating identity.
    - Only the owner edits or deletes, and only while PENDING.
    - Only the bank changes status; never on an expired invoice and never
      out of APPROVED / REJECTED.
    - (supplier, invoice number) is unique.

Rule order (first failure wins):
    create         role CLIENT -> date -> amount -> supplier -> uniqueness
    update         load -> owner -> date -> editable -> amount -> supplier
                   -> uniqueness
    update_status  role BANK -> load -> not expired -> not terminal
    delete         load -> owner -> editable

    The create order checks the date before the supplier, so a past date is
    reported even when the supplier code is also unknown.  Amount and
    currency are coerced before the first rule that reads them and before
    any field of a loaded invoice is assigned.

Concurrency:
    Mutations load the invoice with SELECT ... FOR UPDATE, and the ORM
    mapping carries a version counter, so interleaved writers on one
    invoice cannot both commit.

Failure modes:
    Every rule failure is a typed InvoiceKernelError, logged at WARNING
    with its code and re-raised unchanged.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

from invoice_kernel.db.store import EntityStore
from invoice_kernel.domain import rules
from invoice_kernel.domain.actors import Caller, CallerRole
from invoice_kernel.domain.clock import Clock
from invoice_kernel.domain.lifecycle import CurrencyType, InvoiceStatus, LifecyclePolicy
from invoice_kernel.domain.views import BankInvoiceView, ClientInvoiceView, to_bank_view, to_client_view
from invoice_kernel.exceptions import InvoiceKernelError, InvoiceNotFoundError
from invoice_kernel.logging_config import LogContext, get_logger
from invoice_kernel.models.invoice import Invoice
from invoice_kernel.services.base import BaseService

logger = get_logger("services.invoice")


class InvoiceService(BaseService):
    """
    Lifecycle engine for invoices.

    Contract:
        Every public method takes the resolved ``Caller`` and either returns
        the role-appropriate view or raises a typed failure.  Nothing is
        persisted when a rule fails.
    """

    def __init__(
        self,
        store: EntityStore,
        clock: Clock | None = None,
        policy: LifecyclePolicy | None = None,
    ):
        super().__init__(store, clock)
        self.policy = policy or LifecyclePolicy()

    @contextmanager
    def _operation(self, name: str, caller: Caller, invoice_id: int | None = None) -> Iterator[None]:
        with LogContext.bind(
            actor_id=caller.identity,
            role=caller.role.value,
            operation=name,
            invoice_id=str(invoice_id) if invoice_id is not None else None,
        ):
            try:
                yield
            except InvoiceKernelError as exc:
                logger.warning(
                    "invoice_operation_rejected",
                    extra={"code": exc.code, "reason": str(exc)},
                )
                raise

    def _load(self, invoice_id: int) -> Invoice:
        invoice = self.store.find_invoice(invoice_id, for_update=True)
        if invoice is None:
            raise InvoiceNotFoundError(str(invoice_id))
        return invoice

    def create_invoice(
        self,
        supplier_id: str,
        invoice_number: str,
        invoice_date: date,
        amount: Decimal,
        currency: CurrencyType,
        caller: Caller,
    ) -> ClientInvoiceView:
        """
        Raise a new PENDING invoice owned by ``caller``.

        Args:
            supplier_id: Supplier code (e.g. "SP_00001").
            invoice_number: Number, unique per supplier.
            invoice_date: Must not precede today.
            amount: Strictly positive.
            currency: Invoice currency.
            caller: The creating client.

        Returns:
            ClientInvoiceView of the stored invoice.

        Raises:
            RoleNotPermittedError: Caller is not a client.
            InvalidDateError: ``invoice_date`` is before today.
            InvalidAmountError: ``amount`` is not positive.
            SupplierNotFoundError: Unknown supplier code.
            DuplicateInvoiceNumberError: Number already used for this supplier.
        """
        with self._operation("create_invoice", caller):
            rules.check_role(caller, CallerRole.CLIENT, "create an invoice")
            new_amount = Decimal(amount)
            new_currency = CurrencyType(currency)
            rules.check_date_not_in_past(invoice_date, self.clock.today())
            rules.check_amount_positive(new_amount)
            supplier = rules.check_supplier_exists(
                self.store.find_supplier_by_code(supplier_id), supplier_id
            )
            rules.check_unique_invoice_number(
                self.store.find_conflicting_invoice_id(supplier.id, invoice_number),
                supplier_id,
                invoice_number,
            )

            invoice = Invoice(
                invoice_number=invoice_number,
                supplier=supplier,
                client=self.store.find_client_by_username(caller.identity),
                invoice_date=invoice_date,
                amount=new_amount,
                currency=new_currency,
                status=InvoiceStatus.PENDING,
                owner_identity=caller.identity,
            )
            self.store.save_invoice(invoice)

            logger.info(
                "invoice_created",
                extra={
                    "invoice_id": invoice.id,
                    "supplier_id": supplier.code,
                    "invoice_number": invoice_number,
                    "amount": str(invoice.amount),
                    "currency": invoice.currency.value,
                },
            )
            return to_client_view(invoice)

    def update_invoice(
        self,
        invoice_id: int,
        caller: Caller,
        *,
        supplier_id: str | None = None,
        invoice_number: str | None = None,
        invoice_date: date | None = None,
        amount: Decimal | None = None,
        currency: CurrencyType | None = None,
    ) -> ClientInvoiceView:
        """
        Edit a PENDING invoice.  Only fields passed as non-None change.

        Raises:
            InvoiceNotFoundError: Unknown invoice id.
            NotOwnerError: Caller did not create the invoice.
            InvalidDateError: New date is before today.
            IllegalStateForEditError: Invoice is no longer PENDING.
            InvalidAmountError: New amount is not positive.
            SupplierNotFoundError: New supplier code is unknown.
            DuplicateInvoiceNumberError: Resulting (supplier, number) is taken.
        """
        with self._operation("update_invoice", caller, invoice_id):
            invoice = self._load(invoice_id)
            rules.check_owned_by_caller(invoice.id, invoice.owner_identity, caller, "update")
            if invoice_date is not None:
                rules.check_date_not_in_past(invoice_date, self.clock.today())
            rules.check_editable_status(invoice.id, invoice.status, "update")
            new_amount = Decimal(amount) if amount is not None else invoice.amount
            new_currency = CurrencyType(currency) if currency is not None else invoice.currency
            if amount is not None:
                rules.check_amount_positive(new_amount)

            supplier = invoice.supplier
            if supplier_id is not None and supplier_id != supplier.code:
                supplier = rules.check_supplier_exists(
                    self.store.find_supplier_by_code(supplier_id), supplier_id
                )
            number = invoice_number if invoice_number is not None else invoice.invoice_number
            if supplier is not invoice.supplier or number != invoice.invoice_number:
                rules.check_unique_invoice_number(
                    self.store.find_conflicting_invoice_id(supplier.id, number),
                    supplier.code,
                    number,
                    excluding_id=invoice.id,
                )

            changed: list[str] = []
            if supplier is not invoice.supplier:
                invoice.supplier = supplier
                changed.append("supplier_id")
            if number != invoice.invoice_number:
                invoice.invoice_number = number
                changed.append("invoice_number")
            if invoice_date is not None and invoice_date != invoice.invoice_date:
                invoice.invoice_date = invoice_date
                changed.append("invoice_date")
            if new_amount != invoice.amount:
                invoice.amount = new_amount
                changed.append("amount")
            if new_currency is not invoice.currency:
                invoice.currency = new_currency
                changed.append("currency")

            self.store.save_invoice(invoice)
            logger.info(
                "invoice_updated",
                extra={"invoice_id": invoice.id, "changed_fields": changed},
            )
            return to_client_view(invoice)

    def update_status(
        self,
        invoice_id: int,
        new_status: InvoiceStatus,
        caller: Caller,
    ) -> BankInvoiceView:
        """
        Set an invoice's status directly.

        The bank may set any status; the change is refused when the invoice
        is expired or already APPROVED / REJECTED.

        Raises:
            RoleNotPermittedError: Caller is not the bank.
            InvoiceNotFoundError: Unknown invoice id.
            InvoiceExpiredError: Invoice age exceeds the expiry threshold.
            TerminalStateError: Invoice is APPROVED or REJECTED.
        """
        with self._operation("update_status", caller, invoice_id):
            rules.check_role_is_bank(caller)
            target = InvoiceStatus(new_status)
            invoice = self._load(invoice_id)
            rules.check_not_expired(
                invoice.id,
                invoice.invoice_date,
                self.clock.today(),
                self.policy.expiry_days,
            )
            rules.check_transition_allowed(invoice.id, invoice.status)

            previous = invoice.status
            invoice.status = target
            self.store.save_invoice(invoice)
            logger.info(
                "invoice_status_updated",
                extra={
                    "invoice_id": invoice.id,
                    "from_status": previous.value,
                    "to_status": target.value,
                },
            )
            return to_bank_view(invoice)

    def delete_invoice(self, invoice_id: int, caller: Caller) -> int:
        """
        Remove a PENDING invoice.

        Returns:
            The deleted invoice id.

        Raises:
            InvoiceNotFoundError: Unknown invoice id.
            NotOwnerError: Caller did not create the invoice.
            IllegalStateForEditError: Invoice is no longer PENDING.
        """
        with self._operation("delete_invoice", caller, invoice_id):
            invoice = self._load(invoice_id)
            rules.check_owned_by_caller(invoice.id, invoice.owner_identity, caller, "delete")
            rules.check_editable_status(invoice.id, invoice.status, "delete")

            self.store.delete_invoice(invoice)
            logger.info("invoice_deleted", extra={"invoice_id": invoice_id})
            return invoice_id
