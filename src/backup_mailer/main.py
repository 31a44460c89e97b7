"""Backup Mailer – FastAPI application entry-point."""

from contextlib import asynccontextmanager
import logging
import sys
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import Response

from src.backup_mailer.config import Settings, get_settings, load_smtp_config
from src.backup_mailer.errors import BackupError, ConfigurationError, MailConfigurationError
from src.backup_mailer.responses import render_error
from src.backup_mailer.router import backup, health

try:
    settings = get_settings()
    settings_error: ConfigurationError | None = None
except ConfigurationError as exc:
    # Start with defaults; requests keep failing with 500 until the env is fixed
    settings = Settings.model_construct()
    settings_error = exc

# Configure logging from settings: one line per record on stdout
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

if settings_error is not None:
    logger.error("Settings invalid at startup, using defaults error=%s", settings_error.detail)


# ──────────────────────────────────────────────
# Lifespan: report configuration problems on startup
# ──────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    if not settings.token:
        logger.warning("TOKEN is not set, every backup request will fail with 500")
    try:
        config = load_smtp_config()
    except MailConfigurationError as exc:
        logger.warning("SMTP environment not usable yet error=%s", exc)
    else:
        logger.info(
            "SMTP configured host=%s port=%s encryption=%s",
            config.host, config.port, config.encryption.value,
        )
    yield
    logger.info("Shutting down")


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
app = FastAPI(
    title="Backup Mailer API",
    description="Receive an uploaded file and forward it as an email attachment.",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(BackupError)
async def backup_error_handler(_request: Request, exc: BackupError) -> Response:
    try:
        fmt = get_settings().response_format
    except ConfigurationError:
        fmt = "json"
    return render_error(fmt, exc.status_code, exc.message, exc.detail)


# ── register routers ──
app.include_router(health.router)
app.include_router(backup.router)
