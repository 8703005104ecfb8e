from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentMethod(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    paymentMethod: str
    paymentName: str = ""
    paymentImage: str = ""
    totalFee: str = ""


class GetPaymentMethodsRequest(BaseModel):
    merchantcode: str
    amount: int
    datetime: str
    signature: str


class PaymentMethodResponse(BaseModel):
    """Body of ``merchant/paymentmethod/getpaymentmethod``.

    Example::

        {
          "paymentFee": [
            {"paymentMethod": "VA", "paymentName": "MAYBANK VA",
             "paymentImage": "https://images.duitku.com/hotlink-ok/VA.PNG", "totalFee": "0"}
          ],
          "responseCode": "00",
          "responseMessage": "SUCCESS"
        }
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    paymentFee: list[PaymentMethod] = Field(default_factory=list)
    responseCode: str
    responseMessage: str = ""

    @field_validator("paymentFee", mode="before")
    @classmethod
    def null_fee_list(cls, value: object) -> object:
        # Rejected lookups come back with "paymentFee": null.
        return [] if value is None else value


class PaymentMethodsQuery(BaseModel):
    amount: int = Field(..., gt=0)


class PaymentMethodListData(BaseModel):
    amount: int
    paymentMethods: list[PaymentMethod]
