"""Request/Response schemas for the FastAPI endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ExceptionDetail(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    id: str  # "NO_USER" | "ERR_STORE_UNAVAILABLE" | "ERR_MALFORMED_PREFERENCES" | "ERR_CREDENTIALSTORE"
    message: str
    exception: Optional[ExceptionDetail] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str = "ok"
