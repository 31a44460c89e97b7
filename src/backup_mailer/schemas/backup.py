from typing import Any

from pydantic import BaseModel, Field


class UploadRequest(BaseModel):
    """File and title extracted from a POST /api/backup form."""
    title: str
    filename: str
    content: bytes
    size: int


class BackupResult(BaseModel):
    """``data`` payload of a successful JSON response."""
    filename: str
    title: str
    size: int
    timestamp: str


class APIResponse(BaseModel):
    """JSON envelope used for every response in ``json`` format."""
    code: int
    msg: str
    data: dict[str, Any] = Field(default_factory=dict)
