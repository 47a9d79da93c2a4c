"""
Tests for the settings loader (``invoice_config``).

Covers:
- Packaged defaults load and validate
- Overrides from a YAML file
- Rejection of unknown keys and bad values
- Checksum determinism
- Bridge into the kernel's LifecyclePolicy
"""

from pathlib import Path

import pytest
import yaml

from invoice_config import DEFAULT_SETTINGS_PATH, InvoiceSettings, get_active_settings
from invoice_config.bridges import build_lifecycle_policy
from invoice_config.loader import compute_checksum, load_yaml_file, parse_settings
from invoice_kernel.domain.lifecycle import LifecyclePolicy


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(content)
    return path


class TestDefaults:

    def test_packaged_defaults_load(self):
        settings = get_active_settings()

        assert settings.expiry_days == 30
        assert settings.default_page_size == 10
        assert settings.max_page_size == 100
        assert settings.database_url == "sqlite://"
        assert settings.echo_sql is False

    def test_defaults_file_ships_with_package(self):
        assert DEFAULT_SETTINGS_PATH.exists()

    def test_checksum_attached(self):
        settings = get_active_settings()
        assert settings.checksum == compute_checksum(settings)
        assert len(settings.checksum) == 64


class TestOverrides:

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = _write(tmp_path, "expiry_days: 45\n")

        settings = get_active_settings(path)
        assert settings.expiry_days == 45
        assert settings.default_page_size == 10

    def test_empty_file_means_defaults(self, tmp_path):
        path = _write(tmp_path, "")

        settings = get_active_settings(path)
        assert settings.expiry_days == InvoiceSettings().expiry_days

    def test_path_given_as_string(self, tmp_path):
        path = _write(tmp_path, "max_page_size: 50\n")

        assert get_active_settings(str(path)).max_page_size == 50

    def test_checksum_changes_with_values(self, tmp_path):
        a = get_active_settings(_write(tmp_path, "expiry_days: 30\n"))
        b = get_active_settings(_write(tmp_path, "expiry_days: 31\n"))
        assert a.checksum != b.checksum


class TestValidation:

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown settings keys: expiry_dayz"):
            parse_settings({"expiry_dayz": 10})

    @pytest.mark.parametrize(
        "data",
        [
            {"expiry_days": "thirty"},
            {"expiry_days": -1},
            {"default_page_size": 0},
            {"max_page_size": True},
        ],
    )
    def test_bad_numbers_rejected(self, data):
        with pytest.raises(ValueError):
            parse_settings(data)

    def test_max_below_default_rejected(self):
        with pytest.raises(ValueError, match="max_page_size"):
            parse_settings({"default_page_size": 50, "max_page_size": 20})

    def test_echo_sql_must_be_bool(self):
        with pytest.raises(ValueError, match="echo_sql"):
            parse_settings({"echo_sql": "yes please"})

    def test_non_mapping_document_rejected(self, tmp_path):
        path = _write(tmp_path, "- expiry_days\n- 30\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_yaml_file(path)

    def test_malformed_yaml_propagates(self, tmp_path):
        path = _write(tmp_path, "expiry_days: [30\n")

        with pytest.raises(yaml.YAMLError):
            get_active_settings(path)

    def test_missing_file_propagates(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_settings(tmp_path / "absent.yaml")


class TestBridges:

    def test_lifecycle_policy_from_settings(self):
        settings = InvoiceSettings(expiry_days=14, default_page_size=25, max_page_size=200)

        policy = build_lifecycle_policy(settings)
        assert policy == LifecyclePolicy(expiry_days=14, default_page_size=25, max_page_size=200)

    def test_defaults_bridge_to_default_policy(self):
        assert build_lifecycle_policy(get_active_settings()) == LifecyclePolicy()
