from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from duitku_api.schemas.common import error_response

logger = logging.getLogger(__name__)


class ApiException(Exception):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


class DuitkuError(ApiException):
    """Base class for every error raised by the Duitku client."""

    default_status_code = 502
    default_code = "duitku_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=status_code or self.default_status_code,
            code=code or self.default_code,
            message=message,
            details=details,
        )


class ValidationError(DuitkuError):
    default_status_code = 400
    default_code = "validation_error"


class MissingFieldsError(ValidationError):
    def __init__(self, fields: list[str], *, context: str = "callback") -> None:
        self.fields = list(fields)
        super().__init__(
            f"missing required {context} parameters: {', '.join(self.fields)}",
            code="missing_fields",
            details={"fields": self.fields},
        )


class InvalidSignatureError(DuitkuError):
    default_status_code = 400
    default_code = "invalid_signature"


class TransportError(DuitkuError):
    default_code = "duitku_network_error"


class ApiError(DuitkuError):
    """The gateway answered, but with a non-success code."""

    default_code = "duitku_api_error"

    def __init__(
        self,
        message: str,
        *,
        remote_code: str | None = None,
        remote_message: str | None = None,
        http_status: int | None = None,
        operation: str | None = None,
    ) -> None:
        self.remote_code = remote_code
        self.remote_message = remote_message
        self.http_status = http_status
        super().__init__(
            message,
            details={
                "operation": operation,
                "remoteCode": remote_code,
                "remoteMessage": remote_message,
                "httpStatus": http_status,
            },
        )


class DecodingError(DuitkuError):
    default_code = "duitku_invalid_response"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiException)
    async def _api_exception(_: Request, exc: ApiException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(code=exc.code, message=exc.message, details=exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_response(
                code="validation_error",
                message="Request validation failed",
                details={"errors": jsonable_encoder(exc.errors())},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content=error_response(code="not_found", message="Route not found"))
        return JSONResponse(status_code=exc.status_code, content=error_response(code="http_error", message=str(exc.detail)))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_response(code="internal_server_error", message="Internal server error"),
        )
