"""
invoice_config -- single public entrypoint for invoice kernel settings.

Responsibility:
    Provides the ONLY way to obtain settings at runtime through
    ``get_active_settings()``.  Returns a frozen ``InvoiceSettings``.
    Kernel components receive plain values (``LifecyclePolicy``) built by
    ``invoice_config.bridges``; the kernel MUST NEVER import invoice_config.

Failure modes:
    - ``FileNotFoundError`` -- settings file does not exist.
    - ``ValueError`` -- unknown keys or invalid values.
"""

from __future__ import annotations

import logging
from pathlib import Path

from invoice_config.loader import load_yaml_file, parse_settings
from invoice_config.schema import InvoiceSettings

_logger = logging.getLogger("invoice_kernel.config")

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_settings(path: Path | str | None = None) -> InvoiceSettings:
    """The ONLY public settings entrypoint.

    Args:
        path: YAML settings file.  Defaults to the packaged defaults.yaml.

    Returns:
        Validated, frozen InvoiceSettings.
    """
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    settings = parse_settings(load_yaml_file(settings_path))
    _logger.info(
        "INVOICE_CONFIG_TRACE",
        extra={
            "settings_path": str(settings_path),
            "checksum": settings.checksum,
            "expiry_days": settings.expiry_days,
            "default_page_size": settings.default_page_size,
            "max_page_size": settings.max_page_size,
        },
    )
    return settings


__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "InvoiceSettings",
    "get_active_settings",
]
