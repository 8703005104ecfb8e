from __future__ import annotations

from fastapi import APIRouter, Depends

from duitku_api.schemas.common import ErrorEnvelope, SuccessEnvelope, success_response
from duitku_api.schemas.transactions import TransactionRequest, TransactionResponse, TransactionStatusResponse
from duitku_api.services.duitku_client import DuitkuClient, get_duitku_client

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    responses={400: {"model": ErrorEnvelope}, 502: {"model": ErrorEnvelope}},
)


@router.post("", response_model=SuccessEnvelope[TransactionResponse])
def create_transaction(
    payload: TransactionRequest,
    client: DuitkuClient = Depends(get_duitku_client),
) -> dict:
    data = client.create_transaction(payload)
    return success_response(data, operation="inquiry")


@router.get("/{merchant_order_id:path}", response_model=SuccessEnvelope[TransactionStatusResponse])
def check_transaction(
    merchant_order_id: str,
    client: DuitkuClient = Depends(get_duitku_client),
) -> dict:
    data = client.check_transaction(merchant_order_id)
    return success_response(data, operation="transactionStatus", successful=data.is_successful())
