import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.backup_mailer.errors import ConfigurationError, MailConfigurationError, MailPortFormatError

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Service settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Bearer token expected in the Authorization header
    token: str = ""

    # Response body format: JSON envelope or plain text
    response_format: Literal["json", "text"] = "json"

    # Upload settings
    max_upload_size: int = 5 * 1024 * 1024  # 5 MiB

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings() -> Settings:
    """FastAPI dependency – settings are re-read for every request."""
    try:
        return Settings()
    except ValidationError as exc:
        fields = ", ".join(str(error["loc"][0]) for error in exc.errors() if error["loc"])
        logger.error("Settings invalid fields=%s", fields)
        raise ConfigurationError("服务器配置错误", f"配置无效: {fields}") from exc


# ──────────────────────────────────────────────
# SMTP settings
# ──────────────────────────────────────────────
class EncryptionMode(str, Enum):
    SSL_TLS = "ssl_tls"
    NONE = "none"
    STARTTLS = "starttls"

    @classmethod
    def from_setting(cls, value: str | None) -> "EncryptionMode":
        """Map ``MAIL_SSL`` to a mode; anything unrecognised means STARTTLS."""
        normalized = (value or "").lower()
        if normalized in ("ssl", "tls"):
            return cls.SSL_TLS
        if normalized in ("none", ""):
            return cls.NONE
        return cls.STARTTLS


class MailSettings(BaseSettings):
    """Raw ``MAIL_*`` variables, validated by :func:`load_smtp_config`."""

    host: str = Field(default="", validation_alias="MAIL_HOST")
    port: str = Field(default="", validation_alias="MAIL_PORT")
    username: str = Field(default="", validation_alias="MAIL_MAIL")
    password: str = Field(default="", validation_alias="MAIL_PASS")
    from_address: str = Field(default="", validation_alias="MAIL_FROM")
    to_address: str = Field(default="", validation_alias="MAIL_TO")
    encryption: str = Field(default="", validation_alias="MAIL_SSL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int
    username: str
    password: str
    from_address: str
    to_address: str
    encryption: EncryptionMode


def load_smtp_config() -> SmtpConfig:
    """
    Read the SMTP configuration from the environment.

    Called on every send, so credentials can change without a restart.

    Raises
    ------
    MailConfigurationError – a required variable is empty.
    MailPortFormatError    – ``MAIL_PORT`` is not an integer.
    """
    raw = MailSettings()

    required = (raw.host, raw.port, raw.username, raw.password, raw.from_address, raw.to_address)
    if not all(required):
        raise MailConfigurationError("邮件服务配置不完整")

    try:
        port = int(raw.port)
    except ValueError as exc:
        raise MailPortFormatError(f"SMTP端口格式错误: {exc}") from exc

    return SmtpConfig(
        host=raw.host,
        port=port,
        username=raw.username,
        password=raw.password,
        from_address=raw.from_address,
        to_address=raw.to_address,
        encryption=EncryptionMode.from_setting(raw.encryption),
    )
