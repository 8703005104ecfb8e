from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from duitku_api.constants.duitku import STATUS_SUCCESS, SubscriptionFrequency


class Address(BaseModel):
    firstName: str = ""
    lastName: str = ""
    address: str = ""
    city: str = ""
    postalCode: str = ""
    phone: str = ""
    countryCode: str = ""


class CustomerDetail(BaseModel):
    firstName: str = ""
    lastName: str = ""
    email: str = ""
    phoneNumber: str | None = None
    billingAddress: Address | None = None
    shippingAddress: Address | None = None


class ItemDetail(BaseModel):
    name: str = Field(..., min_length=1)
    # Line total (unit price multiplied by quantity), in rupiah.
    price: int = Field(..., ge=0)
    quantity: int = Field(..., ge=1)


class OVOPaymentDetail(BaseModel):
    paymentType: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)


class OVODetail(BaseModel):
    paymentDetails: list[OVOPaymentDetail]


class ShopeeDetail(BaseModel):
    useCoin: bool = False
    promoId: str | None = None


class AccountLink(BaseModel):
    credentialCode: str = Field(..., min_length=1)
    ovo: OVODetail | None = None
    shopee: ShopeeDetail | None = None


class CreditCardDetail(BaseModel):
    acquirer: str = Field(..., min_length=1)
    binWhitelist: list[str] | None = None


class SubscriptionDetail(BaseModel):
    description: str = Field(..., min_length=1)
    frequencyType: SubscriptionFrequency
    frequencyInterval: int = Field(..., ge=1)
    totalNoOfCycles: int = Field(..., ge=0)
    firstRunDate: str | None = None


class TransactionRequest(BaseModel):
    paymentAmount: int = Field(..., gt=0)
    merchantOrderId: str = Field(..., min_length=1, max_length=50)
    productDetails: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    paymentMethod: str = Field(..., min_length=1, max_length=2)
    customerVaName: str = Field(..., min_length=1)
    returnUrl: str = Field(..., min_length=1)
    callbackUrl: str = Field(..., min_length=1)
    expiryPeriod: int = Field(..., gt=0)

    additionalParam: str | None = None
    merchantUserInfo: str | None = None
    phoneNumber: str | None = None
    itemDetails: list[ItemDetail] | None = None
    customerDetail: CustomerDetail | None = None
    accountLink: AccountLink | None = None
    creditCardDetail: CreditCardDetail | None = None
    isSubscription: bool | None = None
    subscriptionDetail: SubscriptionDetail | None = None

    @field_validator("itemDetails")
    @classmethod
    def validate_item_details(cls, value: list[ItemDetail] | None) -> list[ItemDetail] | None:
        if value is not None and not value:
            return None
        return value

    @model_validator(mode="after")
    def validate_subscription(self) -> "TransactionRequest":
        if self.isSubscription and self.subscriptionDetail is None:
            raise ValueError("isSubscription requires subscriptionDetail")
        return self


class TransactionResponse(BaseModel):
    """Body of ``merchant/v2/inquiry``.

    ``vaNumber`` is only set for virtual account methods and ``qrString`` only
    for QRIS methods.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    merchantCode: str = ""
    reference: str = ""
    paymentUrl: str | None = None
    vaNumber: str | None = None
    qrString: str | None = None
    amount: str = ""
    statusCode: str
    statusMessage: str = ""


class CheckTransactionRequest(BaseModel):
    merchantCode: str
    merchantOrderId: str
    signature: str


class TransactionStatusResponse(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    merchantOrderId: str = ""
    reference: str = ""
    amount: str = ""
    fee: str = ""
    statusCode: str
    statusMessage: str = ""

    def is_successful(self) -> bool:
        return self.statusCode == STATUS_SUCCESS
