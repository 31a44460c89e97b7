"""Response rendering for the two supported body formats."""

from typing import Any, Literal

from fastapi.responses import JSONResponse, PlainTextResponse, Response

from src.backup_mailer.schemas.backup import APIResponse

SUCCESS_MESSAGE = "备份成功"

ResponseFormat = Literal["json", "text"]


def render_success(fmt: ResponseFormat, data: dict[str, Any]) -> Response:
    if fmt == "text":
        return PlainTextResponse(f"{SUCCESS_MESSAGE}!", status_code=200)
    body = APIResponse(code=200, msg=SUCCESS_MESSAGE, data=data)
    return JSONResponse(body.model_dump(), status_code=200)


def render_error(fmt: ResponseFormat, status_code: int, message: str, detail: str) -> Response:
    if fmt == "text":
        return PlainTextResponse(f"{message}: {detail}", status_code=status_code)
    body = APIResponse(code=status_code, msg=message, data={"error": detail})
    return JSONResponse(body.model_dump(), status_code=status_code)
