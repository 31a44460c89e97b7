"""Service layer – multipart parsing of backup uploads."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from src.backup_mailer.errors import UploadError
from src.backup_mailer.schemas.backup import UploadRequest

logger = logging.getLogger(__name__)

UPLOAD_FAILED = "文件上传失败"
READ_FAILED = "文件读取失败"


def default_title(today: date | None = None) -> str:
    """Subject used when the form carries no (or a blank) title."""
    today = today or date.today()
    return f"[数据备份][未命名数据]{today.isoformat()}备份"


async def parse_upload(request: Request, max_size: int) -> UploadRequest:
    """
    Read the ``title`` and ``file`` fields of a multipart request.

    The body is bounded by *max_size* bytes. Oversized bodies, parse failures,
    a missing ``file`` part and read errors all raise :class:`UploadError`.
    """
    # ── size limit ──
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_size:
        logger.error("Upload rejected content_length=%s max_size=%s", declared, max_size)
        raise UploadError(UPLOAD_FAILED, f"request body exceeds {max_size} bytes")

    body = await request.body()
    if len(body) > max_size:
        logger.error("Upload rejected body_size=%s max_size=%s", len(body), max_size)
        raise UploadError(UPLOAD_FAILED, f"request body exceeds {max_size} bytes")

    # ── multipart parse ──
    try:
        form = await request.form()
    except MultiPartException as exc:
        logger.error("Multipart parse failed error=%s", exc.message)
        raise UploadError(UPLOAD_FAILED, exc.message) from exc
    except StarletteHTTPException as exc:
        logger.error("Multipart parse failed error=%s", exc.detail)
        raise UploadError(UPLOAD_FAILED, str(exc.detail)) from exc
    except ValueError as exc:
        # python-multipart reports malformed framing as ValueError subclasses
        logger.error("Multipart parse failed error=%s", exc)
        raise UploadError(UPLOAD_FAILED, str(exc)) from exc

    # ── title ──
    raw_title = form.get("title")
    title = raw_title.strip() if isinstance(raw_title, str) else ""
    if not title:
        title = default_title()
    if "\r" in title or "\n" in title:
        logger.error("Title rejected, contains line breaks")
        raise UploadError(UPLOAD_FAILED, "title must not contain line breaks")

    # ── file ──
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        logger.error("File missing from form field=file")
        raise UploadError(UPLOAD_FAILED, "no file uploaded in form field 'file'")

    try:
        content = await upload.read()
    except OSError as exc:
        logger.error("File read failed filename=%s error=%s", upload.filename, exc)
        raise UploadError(READ_FAILED, str(exc)) from exc
    finally:
        await upload.close()

    return UploadRequest(
        title=title,
        filename=upload.filename or "",
        content=content,
        size=len(content),
    )
