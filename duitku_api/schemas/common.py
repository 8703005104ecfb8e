from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

T = TypeVar("T")


class ErrorBody(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class ErrorEnvelope(BaseModel):
    success: Literal[False] = False
    error: ErrorBody


class SuccessEnvelope(BaseModel, Generic[T]):
    success: Literal[True] = True
    data: T
    meta: dict[str, Any] | None = None


class HealthData(BaseModel):
    status: str = "ok"
    service: str = "duitku-api"
    environment: str | None = None


def success_response(data: Any, *, operation: str | None = None, **meta: Any) -> dict[str, Any]:
    """Wrap ``data``; ``operation`` names the Duitku endpoint that produced it."""
    payload: dict[str, Any] = {"success": True, "data": jsonable_encoder(data, exclude_none=True)}
    if operation is not None:
        meta = {"operation": operation, **meta}
    if meta:
        payload["meta"] = jsonable_encoder(meta, exclude_none=True)
    return payload


def error_response(*, code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    cleaned = jsonable_encoder(details, exclude_none=True) if details else None
    if cleaned:
        error["details"] = cleaned
    return {"success": False, "error": error}
