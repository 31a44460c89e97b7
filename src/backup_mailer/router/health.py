"""Router – health check."""

from fastapi import APIRouter

from src.backup_mailer.config import load_smtp_config
from src.backup_mailer.errors import MailConfigurationError

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe; also reports whether the SMTP environment is complete."""
    try:
        load_smtp_config()
    except MailConfigurationError:
        mail_configured = False
    else:
        mail_configured = True
    return {"status": "ok", "mail_configured": mail_configured}
