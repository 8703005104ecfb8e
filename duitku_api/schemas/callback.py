from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from duitku_api.constants.duitku import STATUS_SUCCESS

REQUIRED_CALLBACK_FIELDS = ("merchantCode", "amount", "merchantOrderId", "resultCode", "signature")


class CallbackData(BaseModel):
    """Payment notification posted by Duitku to the merchant callback URL.

    ``amount`` is kept exactly as received: it is part of the signed string.
    """

    model_config = ConfigDict(frozen=True)

    merchantCode: str
    amount: str
    merchantOrderId: str
    productDetail: str = ""
    additionalParam: str = ""
    paymentCode: str = ""
    resultCode: str
    merchantUserId: str = ""
    reference: str = ""
    signature: str
    publisherOrderId: str = ""
    spUserHash: str = ""
    settlementDate: str = ""
    issuerCode: str = ""

    def is_successful(self) -> bool:
        return self.resultCode == STATUS_SUCCESS
