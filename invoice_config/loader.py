"""
Configuration Loader (``invoice_config.loader``).

Responsibility
--------------
Loads the YAML settings file and parses it into an ``InvoiceSettings``
frozen dataclass.  Callers go through ``invoice_config.get_active_settings()``.

Invariants enforced
-------------------
* Unknown keys are rejected; a typo never silently falls back to a default.
* Numeric settings must be integers in range; ``echo_sql`` must be a bool.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the parsed
  values for change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown key or bad value  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Any

import yaml

from invoice_config.schema import InvoiceSettings

_INT_FIELDS = ("expiry_days", "default_page_size", "max_page_size")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top-level document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")
    return data


def parse_settings(data: dict[str, Any]) -> InvoiceSettings:
    """
    Parse ``InvoiceSettings`` from a dict, starting from the defaults.

    Raises:
        ValueError: on unknown keys or invalid values.
    """
    known = {f.name for f in fields(InvoiceSettings)} - {"checksum"}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings keys: {', '.join(unknown)}")

    for key in _INT_FIELDS:
        if key in data:
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{key} must be an integer, got {value!r}")
            if value < 0 or (key != "expiry_days" and value < 1):
                raise ValueError(f"{key} out of range: {value}")

    if "echo_sql" in data and not isinstance(data["echo_sql"], bool):
        raise ValueError(f"echo_sql must be a boolean, got {data['echo_sql']!r}")
    if "database_url" in data and not isinstance(data["database_url"], str):
        raise ValueError(f"database_url must be a string, got {data['database_url']!r}")

    settings = InvoiceSettings(**data)
    if settings.max_page_size < settings.default_page_size:
        raise ValueError(
            "max_page_size must be >= default_page_size "
            f"({settings.max_page_size} < {settings.default_page_size})"
        )
    return replace(settings, checksum=compute_checksum(settings))


def compute_checksum(settings: InvoiceSettings) -> str:
    """SHA-256 over the canonical JSON of every setting except the checksum."""
    payload = asdict(settings)
    payload.pop("checksum", None)
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
