"""Exception types raised by the backup endpoint and the mail sender."""

from __future__ import annotations


# ──────────────────────────────────────────────
# Request failures (rendered as HTTP responses)
# ──────────────────────────────────────────────
class BackupError(Exception):
    """A request failure carrying its HTTP status, message and detail."""

    status_code: int = 500

    def __init__(self, message: str, detail: str) -> None:
        super().__init__(f"{message}: {detail}")
        self.message = message
        self.detail = detail


class ConfigurationError(BackupError):
    status_code = 500


class AuthenticationError(BackupError):
    status_code = 401


class UploadError(BackupError):
    status_code = 400


class MailDeliveryError(BackupError):
    status_code = 500


# ──────────────────────────────────────────────
# Mail sender failures
# ──────────────────────────────────────────────
class MailError(Exception):
    """Base class for everything ``send_mail`` can fail with."""


class MailConfigurationError(MailError):
    """SMTP environment is incomplete."""


class MailPortFormatError(MailConfigurationError):
    """``MAIL_PORT`` is not an integer."""


class MailConnectionError(MailError):
    """Connecting, upgrading or authenticating to the SMTP server failed."""


class MailSendError(MailError):
    """The server refused the message or the connection dropped mid-send."""
