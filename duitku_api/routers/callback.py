from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from duitku_api.constants.duitku import PAYMENT_METHOD_NAMES, STATUS_DESCRIPTIONS
from duitku_api.schemas.callback import CallbackData
from duitku_api.services.duitku_client import DuitkuClient, get_duitku_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["callback"])


def log_callback(data: CallbackData) -> None:
    method = PAYMENT_METHOD_NAMES.get(data.paymentCode, data.paymentCode or "unknown")
    status = STATUS_DESCRIPTIONS.get(data.resultCode, "unknown")
    if data.is_successful():
        logger.info(
            "Payment successful merchantOrderId=%s reference=%s amount=%s method=%s",
            data.merchantOrderId,
            data.reference,
            data.amount,
            method,
        )
    else:
        logger.info(
            "Payment not successful merchantOrderId=%s resultCode=%s status=%s method=%s",
            data.merchantOrderId,
            data.resultCode,
            status,
            method,
        )


@router.post("/callback", response_class=PlainTextResponse)
async def receive_callback(
    request: Request,
    client: DuitkuClient = Depends(get_duitku_client),
) -> PlainTextResponse:
    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    outcome = await client.handle_callback_async(fields, request.app.state.callback_handler)
    return PlainTextResponse(outcome.body, status_code=outcome.status_code)
