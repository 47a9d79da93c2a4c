"""
Validation rules (``invoice_kernel.domain.rules``).

Responsibility
--------------
Side-effect-free checks the lifecycle engine runs against current entity
state and the caller.  Each rule returns normally on success and raises a
typed ``InvoiceKernelError`` on failure.  Rules never touch the store:
anything they need (the supplier row, a conflicting invoice id, today's
date) is looked up by the caller and passed in.

Architecture position
---------------------
**Kernel domain layer** -- pure functions.  May import from
``domain/`` and ``exceptions`` only.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TypeVar

from invoice_kernel.domain.actors import Caller, CallerRole
from invoice_kernel.domain.lifecycle import InvoiceStatus, can_transition, is_editable
from invoice_kernel.exceptions import (
    DuplicateInvoiceNumberError,
    IllegalStateForEditError,
    InvalidAmountError,
    InvalidDateError,
    InvoiceExpiredError,
    NotOwnerError,
    RoleNotPermittedError,
    SupplierNotFoundError,
    TerminalStateError,
)

T = TypeVar("T")


def age_in_days(invoice_date: date, today: date) -> int:
    """Days elapsed from ``invoice_date`` to ``today`` (negative if future)."""
    return (today - invoice_date).days


def is_expired(invoice_date: date, today: date, expiry_days: int) -> bool:
    """An invoice is expired once its age exceeds ``expiry_days``."""
    return age_in_days(invoice_date, today) > expiry_days


def check_date_not_in_past(invoice_date: date, today: date) -> None:
    if invoice_date < today:
        raise InvalidDateError(invoice_date.isoformat(), today.isoformat())


AMOUNT_SCALE = 2


def check_amount_positive(amount: Decimal) -> None:
    """
    Reject non-finite, non-positive, or sub-cent amounts.

    Amounts are stored with two decimal places; anything finer would be
    rounded on write.
    """
    if not amount.is_finite():
        raise InvalidAmountError(str(amount), "must be a finite number")
    if amount <= 0:
        raise InvalidAmountError(str(amount))
    if amount.normalize().as_tuple().exponent < -AMOUNT_SCALE:
        raise InvalidAmountError(str(amount), f"must have at most {AMOUNT_SCALE} decimal places")


def check_supplier_exists(supplier: T | None, supplier_code: str) -> T:
    """Return the looked-up supplier, or raise if the lookup found nothing."""
    if supplier is None:
        raise SupplierNotFoundError(supplier_code)
    return supplier


def check_unique_invoice_number(
    conflicting_id: int | None,
    supplier_code: str,
    invoice_number: str,
    excluding_id: int | None = None,
) -> None:
    """
    Reject when another invoice already holds (supplier, number).

    ``conflicting_id`` is the id of any stored invoice with the same supplier
    and number.  An invoice being updated never conflicts with itself.
    """
    if conflicting_id is not None and conflicting_id != excluding_id:
        raise DuplicateInvoiceNumberError(supplier_code, invoice_number)


def check_owned_by_caller(
    invoice_id: int,
    owner_identity: str,
    caller: Caller,
    action: str,
) -> None:
    # Exact string match; no case folding.
    if owner_identity != caller.identity:
        raise NotOwnerError(invoice_id, caller.identity, action)


def check_not_expired(
    invoice_id: int,
    invoice_date: date,
    today: date,
    expiry_days: int,
) -> None:
    if is_expired(invoice_date, today, expiry_days):
        raise InvoiceExpiredError(
            invoice_id, age_in_days(invoice_date, today), expiry_days
        )


def check_editable_status(invoice_id: int, status: InvoiceStatus, action: str) -> None:
    if not is_editable(status):
        raise IllegalStateForEditError(invoice_id, status, action)


def check_transition_allowed(invoice_id: int, current: InvoiceStatus) -> None:
    if not can_transition(current):
        raise TerminalStateError(invoice_id, current)


def check_role(caller: Caller, required: CallerRole, operation: str) -> None:
    """Reject unless the caller holds ``required``."""
    if caller.role is not required:
        raise RoleNotPermittedError(caller.identity, caller.role.value, operation)


def check_role_is_bank(caller: Caller) -> None:
    check_role(caller, CallerRole.BANK, "update the invoice status")
