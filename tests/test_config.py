"""
Tests for settings models and the configuration repository.
"""

import json

import pytest
from pydantic import ValidationError

from autonetbios.domain.config import Credential, EnforcementSettings, WinRMSettings
from autonetbios.infrastructure.config import ConfigRepository


class TestEnforcementSettings:
    """Test EnforcementSettings validation."""

    def test_defaults(self):
        settings = EnforcementSettings()

        assert settings.max_concurrency == 10
        assert settings.event_log == "System"
        assert settings.event_source == "AutoNetbios"
        assert settings.event_id == 555
        assert settings.dry_run is False
        assert settings.credentials is None

    def test_concurrency_bounds(self):
        with pytest.raises(ValidationError):
            EnforcementSettings(max_concurrency=0)
        with pytest.raises(ValidationError):
            EnforcementSettings(max_concurrency=51)

    def test_blank_prefix_is_none(self):
        assert EnforcementSettings(host_prefix="  ").host_prefix is None


class TestWinRMSettings:
    def test_endpoint_uses_transport_port(self):
        assert WinRMSettings().endpoint("ws01") == "http://ws01:5985/wsman"
        assert WinRMSettings(transport="HTTPS").endpoint("ws01") == "https://ws01:5986/wsman"

    def test_unknown_auth_rejected(self):
        with pytest.raises(ValidationError):
            WinRMSettings(auth="credssp")

    def test_read_timeout_must_exceed_operation_timeout(self):
        with pytest.raises(ValidationError):
            WinRMSettings(operation_timeout_sec=60, read_timeout_sec=60)


class TestCredential:
    def test_password_hidden(self):
        cred = Credential(username=" CORP\\svc ", password="s3cret")

        assert cred.username == "CORP\\svc"
        assert cred.get_password() == "s3cret"
        assert "s3cret" not in repr(cred)

    def test_empty_username_rejected(self):
        with pytest.raises(ValidationError):
            Credential(username="  ", password="x")


class TestConfigRepository:
    @pytest.fixture(autouse=True)
    def _no_env_credentials(self, monkeypatch):
        monkeypatch.delenv("AUTONETBIOS_USERNAME", raising=False)
        monkeypatch.delenv("AUTONETBIOS_PASSWORD", raising=False)

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = ConfigRepository(tmp_path / "absent.json").load_settings()

        assert settings == EnforcementSettings()

    def test_file_values_loaded(self, tmp_path):
        path = tmp_path / "enforcement_config.json"
        path.write_text(
            json.dumps(
                {
                    "max_concurrency": 4,
                    "host_prefix": "CORP",
                    "winrm": {"transport": "https", "auth": "kerberos"},
                }
            ),
            encoding="utf-8",
        )

        settings = ConfigRepository(path).load_settings()

        assert settings.max_concurrency == 4
        assert settings.host_prefix == "CORP"
        assert settings.winrm.port == 5986

    def test_overrides_win_and_none_ignored(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"max_concurrency": 4, "dry_run": False}), encoding="utf-8")

        settings = ConfigRepository(path).load_settings({"max_concurrency": None, "dry_run": True})

        assert settings.max_concurrency == 4
        assert settings.dry_run is True

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            ConfigRepository(path).load_settings()

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError):
            ConfigRepository(path).load_settings()

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"max_concurrency": 500}), encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid settings"):
            ConfigRepository(path).load_settings()

    def test_credentials_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AUTONETBIOS_USERNAME", "CORP\\svc-netbios")
        monkeypatch.setenv("AUTONETBIOS_PASSWORD", "pw")

        settings = ConfigRepository(tmp_path / "absent.json").load_settings()

        assert settings.credentials.username == "CORP\\svc-netbios"
        assert settings.credentials.get_password() == "pw"

    def test_file_credentials_take_precedence(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AUTONETBIOS_USERNAME", "env-user")
        monkeypatch.setenv("AUTONETBIOS_PASSWORD", "env-pw")
        path = tmp_path / "c.json"
        path.write_text(
            json.dumps({"credentials": {"username": "file-user", "password": "file-pw"}}),
            encoding="utf-8",
        )

        settings = ConfigRepository(path).load_settings()

        assert settings.credentials.username == "file-user"

    def test_username_without_password_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AUTONETBIOS_USERNAME", "env-user")

        assert ConfigRepository(tmp_path / "absent.json").load_settings().credentials is None
