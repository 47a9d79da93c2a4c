"""
Search criteria and paging (``invoice_kernel.domain.criteria``).

``InvoiceSearchCriteria`` is sparse: every field is optional and ``None``
means "no constraint".  Status and currency sets are OR-combined within the
field; an empty set is treated like ``None``.  All active fields are
AND-combined by the query engine.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from math import ceil
from typing import Generic, TypeVar

from invoice_kernel.domain.lifecycle import CurrencyType, InvoiceStatus

T = TypeVar("T")


def _freeze(values: Iterable | None) -> frozenset | None:
    if values is None:
        return None
    frozen = frozenset(values)
    return frozen or None


@dataclass(frozen=True)
class InvoiceSearchCriteria:
    """Optional filters for invoice searches."""

    client_id: str | None = None
    supplier_id: str | None = None
    invoice_number: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    ageing: int | None = None
    status: frozenset[InvoiceStatus] | None = None
    currency_type: frozenset[CurrencyType] | None = None

    def __post_init__(self) -> None:
        # Accept any iterable (list, tuple, set) and normalise empties to None.
        object.__setattr__(self, "status", _freeze(self.status))
        object.__setattr__(self, "currency_type", _freeze(self.currency_type))
        if self.ageing is not None and self.ageing < 0:
            raise ValueError(f"ageing must be >= 0, got {self.ageing}")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index plus page size (``None`` = policy default)."""

    page: int = 0
    size: int | None = None

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError(f"page must be >= 0, got {self.page}")
        if self.size is not None and self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total match count."""

    items: list[T] = field(default_factory=list)
    page: int = 0
    size: int = 0
    total_items: int = 0

    @property
    def number_of_elements(self) -> int:
        return len(self.items)

    @property
    def total_pages(self) -> int:
        if self.size == 0:
            return 0
        return ceil(self.total_items / self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages
