"""Tests for settings and SMTP configuration loading."""

import pytest

from src.backup_mailer.config import EncryptionMode, Settings, get_settings, load_smtp_config
from src.backup_mailer.errors import ConfigurationError, MailPortFormatError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("ssl", EncryptionMode.SSL_TLS),
        ("SSL", EncryptionMode.SSL_TLS),
        ("tls", EncryptionMode.SSL_TLS),
        ("Tls", EncryptionMode.SSL_TLS),
        ("none", EncryptionMode.NONE),
        ("NONE", EncryptionMode.NONE),
        ("", EncryptionMode.NONE),
        (None, EncryptionMode.NONE),
        ("starttls", EncryptionMode.STARTTLS),
        ("yes", EncryptionMode.STARTTLS),
    ],
)
def test_encryption_mode_from_setting(value, expected) -> None:
    assert EncryptionMode.from_setting(value) is expected


@pytest.mark.usefixtures("smtp_env")
def test_load_smtp_config_reads_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAIL_SSL", "tls")
    config = load_smtp_config()
    assert config.host == "smtp.example.com"
    assert config.port == 587
    assert config.username == "backup@example.com"
    assert config.password == "secret"
    assert config.to_address == "archive@example.com"
    assert config.encryption is EncryptionMode.SSL_TLS


@pytest.mark.usefixtures("smtp_env")
def test_unset_encryption_means_no_encryption() -> None:
    assert load_smtp_config().encryption is EncryptionMode.NONE


@pytest.mark.usefixtures("smtp_env")
def test_load_smtp_config_is_read_per_call(monkeypatch: pytest.MonkeyPatch) -> None:
    assert load_smtp_config().host == "smtp.example.com"
    monkeypatch.setenv("MAIL_HOST", "relay.example.org")
    assert load_smtp_config().host == "relay.example.org"


@pytest.mark.usefixtures("smtp_env")
def test_port_format_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAIL_PORT", "notanumber")
    with pytest.raises(MailPortFormatError):
        load_smtp_config()


def test_settings_defaults() -> None:
    settings = Settings()
    assert settings.token == ""
    assert settings.response_format == "json"
    assert settings.max_upload_size == 5 * 1024 * 1024


def test_get_settings_reports_invalid_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESPONSE_FORMAT", "xml")
    with pytest.raises(ConfigurationError) as exc_info:
        get_settings()
    assert exc_info.value.status_code == 500
    assert "response_format" in exc_info.value.detail
