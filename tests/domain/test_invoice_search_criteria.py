"""Tests for search criteria and paging value objects."""

from datetime import date

import pytest

from invoice_kernel.domain.criteria import InvoiceSearchCriteria, Page, PageRequest
from invoice_kernel.domain.lifecycle import CurrencyType, InvoiceStatus


class TestInvoiceSearchCriteria:

    def test_all_fields_default_to_none(self):
        criteria = InvoiceSearchCriteria()
        assert criteria.client_id is None
        assert criteria.supplier_id is None
        assert criteria.invoice_number is None
        assert criteria.date_from is None
        assert criteria.date_to is None
        assert criteria.ageing is None
        assert criteria.status is None
        assert criteria.currency_type is None

    def test_lists_are_frozen_to_sets(self):
        criteria = InvoiceSearchCriteria(
            status=[InvoiceStatus.PENDING, InvoiceStatus.PENDING],
            currency_type=(CurrencyType.GBP,),
        )
        assert criteria.status == frozenset({InvoiceStatus.PENDING})
        assert criteria.currency_type == frozenset({CurrencyType.GBP})

    def test_empty_sets_mean_no_constraint(self):
        criteria = InvoiceSearchCriteria(status=[], currency_type=set())
        assert criteria.status is None
        assert criteria.currency_type is None

    def test_negative_ageing_rejected(self):
        with pytest.raises(ValueError, match="ageing"):
            InvoiceSearchCriteria(ageing=-1)

    def test_criteria_hashable(self):
        a = InvoiceSearchCriteria(date_from=date(2024, 1, 1), status=[InvoiceStatus.APPROVED])
        b = InvoiceSearchCriteria(date_from=date(2024, 1, 1), status={InvoiceStatus.APPROVED})
        assert a == b
        assert hash(a) == hash(b)


class TestPageRequest:

    def test_defaults(self):
        request = PageRequest()
        assert request.page == 0
        assert request.size is None

    def test_negative_page_rejected(self):
        with pytest.raises(ValueError, match="page"):
            PageRequest(page=-1)

    def test_zero_size_rejected(self):
        with pytest.raises(ValueError, match="size"):
            PageRequest(size=0)


class TestPage:

    def test_total_pages_rounds_up(self):
        page = Page(items=[1, 2], page=0, size=2, total_items=5)
        assert page.total_pages == 3
        assert page.number_of_elements == 2
        assert page.has_next is True

    def test_last_page_has_no_next(self):
        page = Page(items=[5], page=2, size=2, total_items=5)
        assert page.has_next is False

    def test_empty_page(self):
        page = Page(items=[], page=0, size=10, total_items=0)
        assert page.total_pages == 0
        assert page.number_of_elements == 0
        assert page.has_next is False
