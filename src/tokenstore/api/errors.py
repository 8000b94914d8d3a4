"""Exception handlers that render tokenstore errors as the JSON error envelope."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tokenstore.api.schemas import ErrorDetail, ErrorResponse, ExceptionDetail
from tokenstore.exceptions import (
    InvalidPreconditionError,
    MalformedPreferencesError,
    PreferenceStoreError,
    StoreUnavailableError,
)

logger = structlog.get_logger()


def error_response(
    status_code: int, error_id: str, message: str, exc: Exception | None = None
) -> JSONResponse:
    detail = ErrorDetail(
        id=error_id,
        message=message,
        exception=ExceptionDetail(message=str(exc)) if exc is not None else None,
    )
    body = ErrorResponse(error=detail).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


async def _invalid_precondition_handler(request: Request, exc: InvalidPreconditionError):
    logger.info("request.unauthenticated", path=request.url.path)
    return error_response(401, "NO_USER", "No authenticated user is present")


async def _preference_store_handler(request: Request, exc: PreferenceStoreError):
    logger.error(
        "request.store_failed",
        path=request.url.path,
        backend=exc.backend,
        error_type=type(exc).__name__,
    )
    if isinstance(exc, StoreUnavailableError):
        return error_response(
            503, "ERR_STORE_UNAVAILABLE", "Preference store is unavailable", exc
        )
    if isinstance(exc, MalformedPreferencesError):
        return error_response(
            500, "ERR_MALFORMED_PREFERENCES", "Stored preferences could not be read", exc
        )
    return error_response(
        500, "ERR_CREDENTIALSTORE", "Unable to load credential store", exc
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidPreconditionError, _invalid_precondition_handler)
    app.add_exception_handler(PreferenceStoreError, _preference_store_handler)
