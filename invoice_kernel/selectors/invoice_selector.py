"""
Module: invoice_kernel.selectors.invoice_selector
Responsibility: The invoice query engine.  Turns sparse search criteria plus
    the caller's role and identity into a list of SQL predicates, runs a
    paginated fetch through the EntityStore, and projects each row into the
    caller's view shape.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Role scope is always applied on top of the criteria:
        BANK      sees every invoice,
        CLIENT    sees only invoices it owns (owner_identity == identity),
        SUPPLIER  sees only invoices of the supplier its identity acts for.
      A client_id / supplier_id filter can only narrow that scope.
    - Every active criterion is AND-combined; status and currency sets are
      OR-combined within themselves.
    - Results are ordered by invoice id ascending.

Failure modes:
    - RoleNotPermittedError from the role-specific entry points when the
      caller holds a different role.
    - Returns an empty page (never raises) when nothing matches.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from sqlalchemy import false, select

from invoice_kernel.db.store import EntityStore
from invoice_kernel.domain import rules
from invoice_kernel.domain.actors import Caller, CallerRole
from invoice_kernel.domain.clock import Clock
from invoice_kernel.domain.criteria import InvoiceSearchCriteria, Page, PageRequest
from invoice_kernel.domain.lifecycle import LifecyclePolicy
from invoice_kernel.domain.views import (
    BankInvoiceView,
    ClientInvoiceView,
    InvoiceView,
    SupplierInvoiceView,
    project_invoice,
)
from invoice_kernel.logging_config import get_logger
from invoice_kernel.models.invoice import Invoice
from invoice_kernel.models.party import Client, Supplier
from invoice_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.invoice")


def build_criteria_predicates(criteria: InvoiceSearchCriteria, today: date) -> list[Any]:
    """One predicate per non-empty criterion, in field order."""
    predicates: list[Any] = []

    if criteria.client_id is not None:
        predicates.append(
            Invoice.client_id.in_(select(Client.id).where(Client.code == criteria.client_id))
        )
    if criteria.supplier_id is not None:
        predicates.append(
            Invoice.supplier_id.in_(select(Supplier.id).where(Supplier.code == criteria.supplier_id))
        )
    if criteria.invoice_number is not None:
        predicates.append(Invoice.invoice_number == criteria.invoice_number)
    if criteria.date_from is not None:
        predicates.append(Invoice.invoice_date >= criteria.date_from)
    if criteria.date_to is not None:
        predicates.append(Invoice.invoice_date <= criteria.date_to)
    if criteria.ageing is not None:
        # age >= ageing  <=>  invoice_date <= today - ageing
        if criteria.ageing > (today - date.min).days:
            predicates.append(false())
        else:
            predicates.append(Invoice.invoice_date <= today - timedelta(days=criteria.ageing))
    if criteria.status:
        predicates.append(Invoice.status.in_(sorted(criteria.status, key=lambda s: s.value)))
    if criteria.currency_type:
        predicates.append(
            Invoice.currency.in_(sorted(criteria.currency_type, key=lambda c: c.value))
        )

    return predicates


def build_scope_predicates(caller: Caller) -> list[Any]:
    """Implicit visibility restriction for the caller's role."""
    if caller.role is CallerRole.BANK:
        return []
    if caller.role is CallerRole.CLIENT:
        return [Invoice.owner_identity == caller.identity]
    if caller.role is CallerRole.SUPPLIER:
        return [
            Invoice.supplier_id.in_(
                select(Supplier.id).where(Supplier.username == caller.identity)
            )
        ]
    raise ValueError(f"Unhandled caller role: {caller.role!r}")


class InvoiceSelector(BaseSelector):
    """
    Selector for role-scoped invoice searches.

    Guarantees:
        - Read-only: No mutations are performed.
        - Page size defaults to and is capped by the lifecycle policy.
    """

    def __init__(
        self,
        store: EntityStore,
        clock: Clock | None = None,
        policy: LifecyclePolicy | None = None,
    ):
        super().__init__(store, clock)
        self.policy = policy or LifecyclePolicy()

    def _page_size(self, request: PageRequest) -> int:
        size = request.size if request.size is not None else self.policy.default_page_size
        return min(size, self.policy.max_page_size)

    def search(
        self,
        criteria: InvoiceSearchCriteria | None,
        caller: Caller,
        page_request: PageRequest | None = None,
    ) -> Page[InvoiceView]:
        """
        Run a paginated search visible to ``caller``.

        Args:
            criteria: Optional filters; ``None`` means no filters.
            caller: Determines the implicit scope and the view shape.
            page_request: Page index and size; defaults to the first page.

        Returns:
            Page of views in the caller's shape, ordered by invoice id.
        """
        criteria = criteria or InvoiceSearchCriteria()
        page_request = page_request or PageRequest()
        size = self._page_size(page_request)

        predicates = build_scope_predicates(caller) + build_criteria_predicates(
            criteria, self.clock.today()
        )
        rows, total = self.store.query_invoices(predicates, page_request.page, size)

        logger.debug(
            "invoice_search",
            extra={
                "actor_id": caller.identity,
                "role": caller.role.value,
                "active_predicates": len(predicates),
                "page": page_request.page,
                "size": size,
                "total_items": total,
            },
        )
        return Page(
            items=[project_invoice(row, caller.role) for row in rows],
            page=page_request.page,
            size=size,
            total_items=total,
        )

    def get_bank_invoices(
        self,
        criteria: InvoiceSearchCriteria | None,
        caller: Caller,
        page_request: PageRequest | None = None,
    ) -> Page[BankInvoiceView]:
        rules.check_role(caller, CallerRole.BANK, "view bank invoices")
        return self.search(criteria, caller, page_request)

    def get_client_invoices(
        self,
        criteria: InvoiceSearchCriteria | None,
        caller: Caller,
        page_request: PageRequest | None = None,
    ) -> Page[ClientInvoiceView]:
        rules.check_role(caller, CallerRole.CLIENT, "view client invoices")
        return self.search(criteria, caller, page_request)

    def get_supplier_invoices(
        self,
        criteria: InvoiceSearchCriteria | None,
        caller: Caller,
        page_request: PageRequest | None = None,
    ) -> Page[SupplierInvoiceView]:
        rules.check_role(caller, CallerRole.SUPPLIER, "view supplier invoices")
        return self.search(criteria, caller, page_request)
