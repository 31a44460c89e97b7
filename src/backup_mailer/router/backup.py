"""Router – file backup by email."""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Header, Request, Response
from starlette.concurrency import run_in_threadpool

from src.backup_mailer.config import Settings, get_settings
from src.backup_mailer.errors import (
    AuthenticationError,
    ConfigurationError,
    MailDeliveryError,
    MailError,
)
from src.backup_mailer.responses import render_success
from src.backup_mailer.schemas.backup import BackupResult
from src.backup_mailer.services.mail_service import send_mail
from src.backup_mailer.services.upload_service import parse_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Backup"])


def verify_token(authorization: str | None, settings: Settings) -> None:
    """Require ``Authorization: Bearer <TOKEN>``, compared as an exact string."""
    if not settings.token:
        logger.error("TOKEN environment variable is not set")
        raise ConfigurationError("服务器配置错误", "认证令牌未配置")

    if authorization != f"Bearer {settings.token}":
        scheme = authorization.split(" ", 1)[0] if authorization and " " in authorization else None
        logger.warning(
            "Token verification failed scheme=%r length=%s",
            scheme, len(authorization) if authorization else 0,
        )
        raise AuthenticationError("认证失败", "无效的认证令牌")


@router.post("/api/backup")
async def backup_file(
    request: Request,
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> Response:
    """
    Email an uploaded file to the configured mailbox.

    Form fields
    -----------
    title : str, optional – mail subject; a dated default is used when blank.
    file  : UploadFile    – the file to attach (body limited to 5 MiB).
    """
    verify_token(authorization, settings)

    upload = await parse_upload(request, settings.max_upload_size)

    # ── send ──
    logger.info("Preparing mail filename=%s title=%s size=%s", upload.filename, upload.title, upload.size)
    try:
        await run_in_threadpool(send_mail, upload.title, upload.filename, upload.content)
    except MailError as exc:
        logger.error("Mail delivery failed filename=%s error=%s", upload.filename, exc)
        raise MailDeliveryError("邮件发送失败", str(exc)) from exc
    logger.info("Backup mailed filename=%s", upload.filename)

    result = BackupResult(
        filename=upload.filename,
        title=upload.title,
        size=upload.size,
        timestamp=datetime.now().astimezone().isoformat(timespec="seconds"),
    )
    return render_success(settings.response_format, result.model_dump())
