"""
Error taxonomy and the uniform JSON error envelope.

Every non-2xx response body looks like:

    {"status": 404, "message": "Note not found"}

A version conflict additionally carries the current row under `data`.
Services raise the classes below (they are `HTTPException`s, so FastAPI
treats them like any other HTTP error); `register_handlers` renders them.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class ApiError(HTTPException):
    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_default: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            status_code=self.status_code_default,
            detail=message or self.message_default,
        )

    @property
    def message(self) -> str:
        return str(self.detail)


class Unauthenticated(ApiError):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    message_default = "Unauthorized."


class InvalidRequest(ApiError):
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Invalid request"


class NotFound(ApiError):
    status_code_default = status.HTTP_404_NOT_FOUND
    message_default = "Not found"


class VersionConflict(ApiError):
    status_code_default = status.HTTP_409_CONFLICT
    message_default = "Version conflict"

    def __init__(self, message: str | None = None, *, data: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.data = data


class UpstreamFault(ApiError):
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_default = GENERIC_ERROR_MESSAGE


def envelope(status_code: int, message: str, *, data: Any = None) -> JSONResponse:
    body: dict[str, Any] = {"status": status_code, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=body)


def _format_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts: list[str] = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        msg = str(err.get("msg") or "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    if not parts:
        return "Invalid request"
    return "Invalid request: " + "; ".join(parts)


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("upstream_fault status=%s message=%s", exc.status_code, exc.message)
    data = exc.data if isinstance(exc, VersionConflict) else None
    return envelope(exc.status_code, exc.message, data=data)


async def _http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Framework-raised errors (unknown route, wrong method, ...). Internal
    # text is only exposed below 500.
    if exc.status_code >= 500:
        return envelope(exc.status_code, GENERIC_ERROR_MESSAGE)
    return envelope(exc.status_code, str(exc.detail))


async def _validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return envelope(status.HTTP_400_BAD_REQUEST, _format_validation_errors(list(exc.errors())))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
