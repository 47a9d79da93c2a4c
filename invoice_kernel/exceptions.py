"""
Typed Exception Hierarchy for the Invoice Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Every lifecycle rule rejects with its own exception class so callers catch
by type, not by message:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (not just a message string)

The human-readable messages are still stable: they name the offending
status or identity so caller-facing text can be asserted in tests.

Example:
    try:
        service.update_status(invoice_id, InvoiceStatus.APPROVED, caller)
    except TerminalStateError as e:
        api_response(code=e.code, status=e.status.name)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from InvoiceKernelError:

    InvoiceKernelError (base)
    |
    +-- NotFoundError
    |   +-- InvoiceNotFoundError
    |   +-- SupplierNotFoundError
    |   +-- ClientNotFoundError
    |
    +-- InvalidDateError
    +-- InvalidAmountError
    |
    +-- ConflictError
    |   +-- DuplicateInvoiceNumberError
    |   +-- IllegalStateForEditError
    |   +-- TerminalStateError
    |
    +-- InvoiceExpiredError
    |
    +-- ForbiddenError
    |   +-- NotOwnerError
    |   +-- RoleNotPermittedError
    |
    +-- PartyAlreadyExistsError
    +-- StoreUnavailableError
    |
    +-- ConcurrencyError
        +-- OptimisticLockError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Not found       | INVOICE_NOT_FOUND           | Invoice id doesn't exist
                | SUPPLIER_NOT_FOUND          | Supplier code doesn't exist
                | CLIENT_NOT_FOUND            | Client code doesn't exist
----------------|-----------------------------|-----------------------------------------
Validation      | INVALID_DATE                | Invoice date precedes today
                | INVALID_AMOUNT              | Amount is zero or negative
----------------|-----------------------------|-----------------------------------------
Conflict        | DUPLICATE_INVOICE_NUMBER    | Supplier + number already used
                | ILLEGAL_STATE_FOR_EDIT      | Edit/delete outside PENDING
                | TERMINAL_STATE              | Status change on APPROVED/REJECTED
----------------|-----------------------------|-----------------------------------------
Expiry          | INVOICE_EXPIRED             | Status change on an expired invoice
----------------|-----------------------------|-----------------------------------------
Forbidden       | NOT_OWNER                   | Edit/delete by a non-owning client
                | ROLE_NOT_PERMITTED          | Operation not open to caller's role
----------------|-----------------------------|-----------------------------------------
Party           | PARTY_ALREADY_EXISTS        | Username already registered
----------------|-----------------------------|-----------------------------------------
Store           | STORE_UNAVAILABLE           | Database unreachable / failed
----------------|-----------------------------|-----------------------------------------
Concurrency     | OPTIMISTIC_LOCK_CONFLICT    | Concurrent modification detected

===============================================================================
TRANSPORT MAPPING
===============================================================================

The kernel never speaks HTTP, but each category has a conventional status
the request layer can map by catching the category base class:

    NotFoundError               -> 404
    InvalidDateError,
    InvalidAmountError,
    ConflictError,
    InvoiceExpiredError,
    PartyAlreadyExistsError     -> 400
    ForbiddenError              -> 403
    ConcurrencyError            -> 409
    StoreUnavailableError       -> 503

===============================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoice_kernel.domain.lifecycle import InvoiceStatus


class InvoiceKernelError(Exception):
    """
    Base exception for all invoice kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INVOICE_KERNEL_ERROR"


# Not-found exceptions


class NotFoundError(InvoiceKernelError):
    """Base exception for missing referenced entities."""

    code: str = "NOT_FOUND"
    entity_label: str = "ENTITY"

    def __init__(self, entity_ref: str):
        self.entity_ref = entity_ref
        super().__init__(f"This {self.entity_label} is not exist.")


class InvoiceNotFoundError(NotFoundError):
    """Invoice with given id was not found."""

    code: str = "INVOICE_NOT_FOUND"
    entity_label: str = "INVOICE"


class SupplierNotFoundError(NotFoundError):
    """Supplier with given code was not found."""

    code: str = "SUPPLIER_NOT_FOUND"
    entity_label: str = "SUPPLIER"


class ClientNotFoundError(NotFoundError):
    """Client with given code was not found."""

    code: str = "CLIENT_NOT_FOUND"
    entity_label: str = "CLIENT"


# Field validation exceptions


class InvalidDateError(InvoiceKernelError):
    """Invoice date lies before the current date."""

    code: str = "INVALID_DATE"

    def __init__(self, invoice_date: str, today: str):
        self.invoice_date = invoice_date
        self.today = today
        super().__init__("The invoice date is an older date.")


class InvalidAmountError(InvoiceKernelError):
    """Invoice amount is not a positive whole number of cents."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, amount: str, reason: str = "must be positive"):
        self.amount = amount
        self.reason = reason
        super().__init__(f"The invoice amount {reason}, got {amount}.")


# Conflict exceptions


class ConflictError(InvoiceKernelError):
    """Base exception for state conflicts."""

    code: str = "CONFLICT"


class DuplicateInvoiceNumberError(ConflictError):
    """Another invoice of the same supplier already uses this number."""

    code: str = "DUPLICATE_INVOICE_NUMBER"

    def __init__(self, supplier_id: str, invoice_number: str):
        self.supplier_id = supplier_id
        self.invoice_number = invoice_number
        super().__init__("An invoice number already exists for this supplier.")


class IllegalStateForEditError(ConflictError):
    """
    Edit or delete attempted on an invoice that has left PENDING.

    The message names the action ("update" / "delete") and the current
    status, e.g. "This invoice can not delete, because invoice is IN_REVIEW."
    """

    code: str = "ILLEGAL_STATE_FOR_EDIT"

    def __init__(self, invoice_id: int, status: InvoiceStatus, action: str):
        self.invoice_id = invoice_id
        self.status = status
        self.action = action
        super().__init__(
            f"This invoice can not {action}, because invoice is {status.name}."
        )


class TerminalStateError(ConflictError):
    """Status change attempted on an APPROVED or REJECTED invoice."""

    code: str = "TERMINAL_STATE"

    def __init__(self, invoice_id: int, status: InvoiceStatus):
        self.invoice_id = invoice_id
        self.status = status
        super().__init__(
            f"This invoice can not update, because invoice is {status.name}."
        )


# Expiry


class InvoiceExpiredError(InvoiceKernelError):
    """Status change attempted on an invoice older than the expiry threshold."""

    code: str = "INVOICE_EXPIRED"

    def __init__(self, invoice_id: int, age_days: int, expiry_days: int):
        self.invoice_id = invoice_id
        self.age_days = age_days
        self.expiry_days = expiry_days
        super().__init__(
            "You can not update the invoice status, because invoice is expire."
        )


# Access-control exceptions


class ForbiddenError(InvoiceKernelError):
    """Base exception for access-control failures."""

    code: str = "FORBIDDEN"


class NotOwnerError(ForbiddenError):
    """Caller is not the client that created the invoice."""

    code: str = "NOT_OWNER"

    def __init__(self, invoice_id: int, caller_identity: str, action: str):
        self.invoice_id = invoice_id
        self.caller_identity = caller_identity
        self.action = action
        super().__init__(
            f"{caller_identity} you do not have permission to {action} this invoice."
        )


class RoleNotPermittedError(ForbiddenError):
    """Caller's role may not perform the requested operation."""

    code: str = "ROLE_NOT_PERMITTED"

    def __init__(self, caller_identity: str, role: str, operation: str):
        self.caller_identity = caller_identity
        self.role = role
        self.operation = operation
        super().__init__(
            f"{caller_identity} you do not have permission to {operation}."
        )


# Party registration


class PartyAlreadyExistsError(InvoiceKernelError):
    """A supplier or client is already registered under this username."""

    code: str = "PARTY_ALREADY_EXISTS"

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User with username {username} already exits.")


# Infrastructure


class StoreUnavailableError(InvoiceKernelError):
    """
    The entity store failed to answer.

    Fatal to the calling operation; the kernel never retries.
    """

    code: str = "STORE_UNAVAILABLE"

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Entity store unavailable during {operation}: {reason}")


class ConcurrencyError(InvoiceKernelError):
    """Base exception for concurrency-related errors."""

    code: str = "CONCURRENCY_ERROR"


class OptimisticLockError(ConcurrencyError):
    """Optimistic locking conflict detected."""

    code: str = "OPTIMISTIC_LOCK_CONFLICT"

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"Optimistic lock conflict on {entity_type} {entity_id}: "
            "entity was modified by another transaction"
        )
