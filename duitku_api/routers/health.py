from __future__ import annotations

from fastapi import APIRouter

from duitku_api.core.config import get_settings
from duitku_api.schemas.common import HealthData, SuccessEnvelope, success_response

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SuccessEnvelope[HealthData])
async def health() -> dict:
    return success_response(HealthData(environment=get_settings().duitku_environment.value))
