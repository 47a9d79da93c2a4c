"""
Hypothesis-based property tests for the pure invoice rules.

Boundaries fuzzed here:
- Dates: any invoice date either passes the date rule or is strictly past
- Expiry: expired exactly when age exceeds the threshold
- Amounts: accepted exactly when strictly positive
- Ownership: accepted exactly when identities match
- Status: terminal statuses never transition, others always may
- Paging: page arithmetic covers every item exactly once
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from invoice_kernel.domain import rules
from invoice_kernel.domain.actors import Caller
from invoice_kernel.domain.criteria import Page
from invoice_kernel.domain.lifecycle import (
    TERMINAL_INVOICE_STATUSES,
    InvoiceStatus,
    can_transition,
    is_editable,
)
from invoice_kernel.exceptions import (
    InvalidAmountError,
    InvalidDateError,
    InvoiceExpiredError,
    NotOwnerError,
)

dates = st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 12, 31))
identities = st.sampled_from(["client", "client2", "Client", "CLIENT", "bank", "acme"])


class TestDateRuleFuzzing:

    @given(invoice_date=dates, today=dates)
    def test_rejects_exactly_past_dates(self, invoice_date, today):
        if invoice_date < today:
            with pytest.raises(InvalidDateError):
                rules.check_date_not_in_past(invoice_date, today)
        else:
            rules.check_date_not_in_past(invoice_date, today)


class TestExpiryFuzzing:

    @given(
        today=dates,
        age=st.integers(min_value=0, max_value=3650),
        expiry_days=st.integers(min_value=0, max_value=365),
    )
    def test_expired_iff_age_exceeds_threshold(self, today, age, expiry_days):
        invoice_date = today - timedelta(days=age)

        assert rules.age_in_days(invoice_date, today) == age
        assert rules.is_expired(invoice_date, today, expiry_days) is (age > expiry_days)

        if age > expiry_days:
            with pytest.raises(InvoiceExpiredError):
                rules.check_not_expired(1, invoice_date, today, expiry_days)
        else:
            rules.check_not_expired(1, invoice_date, today, expiry_days)


class TestAmountFuzzing:

    @given(
        amount=st.decimals(
            min_value=Decimal("-999999.99"),
            max_value=Decimal("999999.99"),
            places=2,
            allow_nan=False,
            allow_infinity=False,
        )
    )
    def test_accepts_exactly_positive_amounts(self, amount):
        if amount > 0:
            rules.check_amount_positive(amount)
        else:
            with pytest.raises(InvalidAmountError):
                rules.check_amount_positive(amount)


class TestOwnershipFuzzing:

    @given(owner=identities, caller_identity=identities)
    def test_only_exact_identity_owns(self, owner, caller_identity):
        caller = Caller.client(caller_identity)
        if owner == caller_identity:
            rules.check_owned_by_caller(1, owner, caller, "update")
        else:
            with pytest.raises(NotOwnerError):
                rules.check_owned_by_caller(1, owner, caller, "update")


class TestStatusFuzzing:

    @given(status=st.sampled_from(list(InvoiceStatus)))
    def test_transition_iff_not_terminal(self, status):
        assert can_transition(status) is (status not in TERMINAL_INVOICE_STATUSES)

    @given(status=st.sampled_from(list(InvoiceStatus)))
    def test_editable_implies_transitionable(self, status):
        if is_editable(status):
            assert can_transition(status)


class TestPagingFuzzing:

    @given(
        total=st.integers(min_value=0, max_value=1000),
        size=st.integers(min_value=1, max_value=100),
    )
    def test_pages_cover_all_items(self, total, size):
        page = Page(items=[], page=0, size=size, total_items=total)

        assert page.total_pages * size >= total
        assert (page.total_pages - 1) * size < total or total == 0
