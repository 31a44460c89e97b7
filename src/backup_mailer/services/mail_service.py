"""Service layer – SMTP connection, message composition and delivery.

Each call to :func:`send_mail` reads the ``MAIL_*`` environment, opens its own
connection, sends exactly one message and closes the connection again.
Nothing is retried; the first failure is raised as a :class:`MailError`.
"""

from __future__ import annotations

import logging
import mimetypes
import smtplib
import ssl
from datetime import datetime
from email.message import EmailMessage

from src.backup_mailer.config import EncryptionMode, SmtpConfig, load_smtp_config
from src.backup_mailer.errors import MailConfigurationError, MailConnectionError, MailSendError

logger = logging.getLogger(__name__)

BODY_TEMPLATE = "<h1>文件备份</h1><p>备份时间: {sent_at}</p><p>文件名: {filename}</p>"


# ──────────────────────────────────────────────
# Connection
# ──────────────────────────────────────────────
def open_connection(config: SmtpConfig) -> smtplib.SMTP:
    """Connect to the SMTP server, negotiate encryption and log in."""
    logger.info(
        "Connecting to SMTP server host=%s port=%s encryption=%s",
        config.host, config.port, config.encryption.value,
    )

    server: smtplib.SMTP | None = None
    try:
        if config.encryption is EncryptionMode.SSL_TLS:
            server = smtplib.SMTP_SSL(config.host, config.port, context=ssl.create_default_context())
        else:
            server = smtplib.SMTP(config.host, config.port)
            if config.encryption is EncryptionMode.STARTTLS:
                server.starttls(context=ssl.create_default_context())
        server.login(config.username, config.password)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("SMTP connection failed host=%s port=%s error=%s", config.host, config.port, exc)
        if server is not None:
            server.close()
        raise MailConnectionError(f"SMTP连接失败: {exc}") from exc

    return server


# ──────────────────────────────────────────────
# Message
# ──────────────────────────────────────────────
def build_message(config: SmtpConfig, title: str, filename: str, content: bytes) -> EmailMessage:
    """Compose the HTML notice with *content* attached under *filename*."""
    message = EmailMessage()
    message["From"] = config.from_address
    message["To"] = config.to_address
    message["Subject"] = title

    sent_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    message.set_content(BODY_TEMPLATE.format(sent_at=sent_at, filename=filename), subtype="html")

    content_type, _ = mimetypes.guess_type(filename)
    maintype, subtype = (content_type or "application/octet-stream").split("/", 1)
    message.add_attachment(content, maintype=maintype, subtype=subtype, filename=filename)
    return message


# ──────────────────────────────────────────────
# Public interface
# ──────────────────────────────────────────────
def send_mail(title: str, filename: str, content: bytes) -> None:
    """
    Send one email with *content* attached.

    Raises
    ------
    MailConfigurationError – the SMTP environment is incomplete (no network I/O).
    MailConnectionError    – connecting or logging in failed.
    MailSendError          – the message could not be delivered.
    """
    try:
        config = load_smtp_config()
    except MailConfigurationError as exc:
        logger.error("SMTP configuration invalid error=%s", exc)
        raise

    server = open_connection(config)

    try:
        message = build_message(config, title, filename, content)
        logger.info("Sending mail to=%s subject=%s", config.to_address, title)
        server.send_message(message)
    except (smtplib.SMTPException, OSError, ValueError) as exc:
        logger.error("Mail send failed to=%s error=%s", config.to_address, exc)
        raise MailSendError(f"邮件发送失败: {exc}") from exc
    finally:
        server.close()

    logger.info("Mail sent to=%s filename=%s", config.to_address, filename)
