"""
Config -> Kernel Bridges.

Functions that convert ``InvoiceSettings`` into kernel-compatible inputs.
These live in invoice_config (the producer) because the kernel must never
import invoice_config.

Usage:
    from invoice_config import get_active_settings
    from invoice_config.bridges import build_lifecycle_policy

    settings = get_active_settings()
    policy = build_lifecycle_policy(settings)
    service = InvoiceService(store, clock, policy)
"""

from __future__ import annotations

from invoice_config.schema import InvoiceSettings
from invoice_kernel.domain.lifecycle import LifecyclePolicy


def build_lifecycle_policy(settings: InvoiceSettings) -> LifecyclePolicy:
    """Build the kernel's LifecyclePolicy from loaded settings."""
    return LifecyclePolicy(
        expiry_days=settings.expiry_days,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
