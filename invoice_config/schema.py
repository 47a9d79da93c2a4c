"""
Configuration schema (``invoice_config.schema``).

Frozen dataclasses describing the settings file.  Parsing lives in
``invoice_config.loader``; conversion into kernel inputs lives in
``invoice_config.bridges``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InvoiceSettings:
    """Runtime settings for the invoice kernel.

    ``expiry_days``: age (in days) beyond which the bank can no longer
    change an invoice's status.
    ``default_page_size`` / ``max_page_size``: search paging.
    ``database_url`` / ``echo_sql``: engine initialisation.
    """

    expiry_days: int = 30
    default_page_size: int = 10
    max_page_size: int = 100
    database_url: str = "sqlite://"
    echo_sql: bool = False
    checksum: str | None = None
