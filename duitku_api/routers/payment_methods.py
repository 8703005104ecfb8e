from __future__ import annotations

from fastapi import APIRouter, Depends

from duitku_api.schemas.common import ErrorEnvelope, SuccessEnvelope, success_response
from duitku_api.schemas.payment_methods import PaymentMethodListData, PaymentMethodsQuery
from duitku_api.services.duitku_client import DuitkuClient, get_duitku_client

router = APIRouter(
    tags=["payment-methods"],
    responses={400: {"model": ErrorEnvelope}, 502: {"model": ErrorEnvelope}},
)


@router.post("/payment-methods", response_model=SuccessEnvelope[PaymentMethodListData])
def list_payment_methods(
    payload: PaymentMethodsQuery,
    client: DuitkuClient = Depends(get_duitku_client),
) -> dict:
    methods = client.get_payment_methods(payload.amount)
    data = PaymentMethodListData(amount=payload.amount, paymentMethods=methods)
    return success_response(data, operation="getPaymentMethod", count=len(methods))
