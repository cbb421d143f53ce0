"""Tests for configuration loading and validation."""

import pytest

from carepair.config import (
    ApiConfig,
    AppConfig,
    BusinessConfig,
    MailConfig,
    StorageConfig,
    _validate_config,
)


def _config(**sections) -> AppConfig:
    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "business", sections.get("business", BusinessConfig()))
    object.__setattr__(config, "storage", sections.get("storage", StorageConfig()))
    object.__setattr__(config, "mail", sections.get("mail", MailConfig()))
    object.__setattr__(config, "api", sections.get("api", ApiConfig()))
    object.__setattr__(config, "log_level", "INFO")
    object.__setattr__(config, "service_name", "test")
    return config


def _api(**overrides) -> ApiConfig:
    api = ApiConfig.__new__(ApiConfig)
    values = {
        "host": "127.0.0.1", "port": 8000, "list_limit": 100, "cors_origins": ("*",),
        "submit_url": "http://localhost:8000/api/bookings", "submit_timeout_sec": 10.0,
    }
    values.update(overrides)
    for key, value in values.items():
        object.__setattr__(api, key, value)
    return api


def _mail(**overrides) -> MailConfig:
    mail = MailConfig.__new__(MailConfig)
    values = {
        "smtp_host": "", "smtp_port": 587, "smtp_user": "", "smtp_pass": "",
        "mail_from": "", "timeout_sec": 10.0, "notifications_enabled": True,
    }
    values.update(overrides)
    for key, value in values.items():
        object.__setattr__(mail, key, value)
    return mail


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        _validate_config(AppConfig())  # should not raise

    def test_invalid_port(self):
        with pytest.raises(ValueError, match="PORT"):
            _validate_config(_config(api=_api(port=70000)))

    def test_invalid_list_limit(self):
        with pytest.raises(ValueError, match="BOOKINGS_LIST_LIMIT"):
            _validate_config(_config(api=_api(list_limit=0)))

    def test_invalid_submit_timeout(self):
        with pytest.raises(ValueError, match="SUBMIT_TIMEOUT"):
            _validate_config(_config(api=_api(submit_timeout_sec=0)))

    def test_invalid_smtp_port(self):
        with pytest.raises(ValueError, match="SMTP_PORT"):
            _validate_config(_config(mail=_mail(smtp_port=0)))

    def test_invalid_mongo_timeout(self):
        storage = StorageConfig.__new__(StorageConfig)
        object.__setattr__(storage, "mongodb_uri", "")
        object.__setattr__(storage, "database_name", "car_repair_booking")
        object.__setattr__(storage, "collection_name", "bookings")
        object.__setattr__(storage, "timeout_ms", 0)

        with pytest.raises(ValueError, match="MONGODB_TIMEOUT_MS"):
            _validate_config(_config(storage=storage))


class TestMailConfig:
    def test_disabled_without_host(self):
        assert _mail(smtp_user="me@example.com").enabled is False

    def test_enabled_with_host_and_user(self):
        assert _mail(smtp_host="smtp.example.com", smtp_user="me@example.com").enabled is True

    def test_switch_off_wins(self):
        mail = _mail(
            smtp_host="smtp.example.com", smtp_user="me@example.com",
            notifications_enabled=False,
        )
        assert mail.enabled is False

    def test_sender_falls_back_to_user(self):
        assert _mail(smtp_user="me@example.com").sender == "me@example.com"
        assert _mail(smtp_user="me@example.com", mail_from="no-reply@x.com").sender == "no-reply@x.com"


class TestEnvParsing:
    def test_safe_int_parsing(self):
        from carepair.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_rejects_garbage(self, monkeypatch):
        from carepair.config import _safe_int

        monkeypatch.setenv("CAREPAIR_TEST_INT", "forty")
        with pytest.raises(ValueError, match="CAREPAIR_TEST_INT"):
            _safe_int("CAREPAIR_TEST_INT", "1")

    def test_safe_float_parsing(self):
        from carepair.config import _safe_float

        assert _safe_float("NONEXISTENT_VAR_12345", "3.14") == pytest.approx(3.14)

    def test_safe_bool_parsing(self, monkeypatch):
        from carepair.config import _safe_bool

        monkeypatch.setenv("CAREPAIR_TEST_BOOL", "no")
        assert _safe_bool("CAREPAIR_TEST_BOOL", "true") is False
        assert _safe_bool("NONEXISTENT_VAR_12345", "yes") is True

    def test_safe_bool_rejects_garbage(self, monkeypatch):
        from carepair.config import _safe_bool

        monkeypatch.setenv("CAREPAIR_TEST_BOOL", "maybe")
        with pytest.raises(ValueError, match="CAREPAIR_TEST_BOOL"):
            _safe_bool("CAREPAIR_TEST_BOOL", "true")
