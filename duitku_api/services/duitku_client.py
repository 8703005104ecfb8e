from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, TypeVar

import httpx
import pydantic

from duitku_api.constants.duitku import (
    BASE_URLS,
    CREATE_TRANSACTION_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    PAYMENT_METHODS_PATH,
    STATUS_SUCCESS,
    TRANSACTION_STATUS_PATH,
    Environment,
)
from duitku_api.core.config import Settings, get_settings
from duitku_api.core.exceptions import ApiError, DecodingError, ValidationError
from duitku_api.schemas.callback import CallbackData
from duitku_api.schemas.payment_methods import GetPaymentMethodsRequest, PaymentMethod, PaymentMethodResponse
from duitku_api.schemas.transactions import (
    CheckTransactionRequest,
    TransactionRequest,
    TransactionResponse,
    TransactionStatusResponse,
)
from duitku_api.services import callback as callback_service
from duitku_api.services.callback import CallbackHandler, CallbackOutcome
from duitku_api.services.signing import (
    format_request_datetime,
    payment_methods_signature,
    transaction_signature,
    transaction_status_signature,
)
from duitku_api.services.transport import HttpxTransport, Transport, TransportResponse

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

_ERROR_CODE_KEYS = ("code", "responseCode", "statusCode", "Code")
_ERROR_MESSAGE_KEYS = ("message", "Message", "responseMessage", "statusMessage")


@dataclass(frozen=True)
class Credentials:
    merchant_code: str
    api_key: str
    environment: Environment = Environment.SANDBOX

    def __post_init__(self) -> None:
        if not self.merchant_code:
            raise ValidationError("merchant code is required", code="missing_credentials")
        if not self.api_key:
            raise ValidationError("api key is required", code="missing_credentials")
        object.__setattr__(self, "environment", Environment(self.environment))

    @property
    def base_url(self) -> str:
        return BASE_URLS[self.environment]


def _first_text(body: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = body.get(key)
        if value is not None and str(value) != "":
            return str(value)
    return None


class DuitkuClient:
    """Synchronous client for the Duitku merchant API.

    Holds only immutable credentials and configuration, so one instance can be
    shared across threads. Every call is a single request with no retries.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        transport: Transport | None = None,
        http_client: httpx.Client | None = None,
        base_url: str | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        logger: logging.Logger | None = None,
        log_requests: bool = False,
    ) -> None:
        self.credentials = credentials
        self.transport: Transport = transport or HttpxTransport(
            base_url=base_url or credentials.base_url,
            timeout_seconds=timeout_seconds,
            http_client=http_client,
        )
        self.logger = logger or logging.getLogger(__name__)
        self.log_requests = log_requests

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "DuitkuClient":
        credentials = Credentials(
            merchant_code=settings.duitku_merchant_code,
            api_key=settings.duitku_api_key,
            environment=settings.duitku_environment,
        )
        kwargs.setdefault("base_url", settings.duitku_base_url)
        kwargs.setdefault("timeout_seconds", settings.duitku_timeout_seconds)
        kwargs.setdefault("log_requests", settings.duitku_log_requests)
        return cls(credentials, **kwargs)

    @property
    def merchant_code(self) -> str:
        return self.credentials.merchant_code

    # Outbound

    def get_payment_methods(self, amount: int, *, moment: datetime | None = None) -> list[PaymentMethod]:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationError("amount must be a positive integer", details={"amount": amount})

        request_datetime = format_request_datetime(moment)
        request = GetPaymentMethodsRequest(
            merchantcode=self.merchant_code,
            amount=amount,
            datetime=request_datetime,
            signature=payment_methods_signature(
                merchant_code=self.merchant_code,
                amount=amount,
                request_datetime=request_datetime,
                api_key=self.credentials.api_key,
            ),
        )

        body = self._post(PAYMENT_METHODS_PATH, request.model_dump(mode="json"), operation="getPaymentMethod")
        response = self._parse(PaymentMethodResponse, body, operation="getPaymentMethod")

        if response.responseCode != STATUS_SUCCESS:
            raise ApiError(
                f"error getting payment methods: {response.responseMessage}",
                remote_code=response.responseCode,
                remote_message=response.responseMessage,
                operation="getPaymentMethod",
            )
        return response.paymentFee

    def create_transaction(self, request: TransactionRequest | Mapping[str, Any]) -> TransactionResponse:
        if not isinstance(request, TransactionRequest):
            try:
                request = TransactionRequest.model_validate(request)
            except pydantic.ValidationError as exc:
                raise ValidationError(
                    "invalid transaction request",
                    details={"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
                ) from exc

        payload = request.model_dump(mode="json", exclude_none=True)
        payload["merchantCode"] = self.merchant_code
        payload["signature"] = transaction_signature(
            merchant_code=self.merchant_code,
            merchant_order_id=request.merchantOrderId,
            amount=request.paymentAmount,
            api_key=self.credentials.api_key,
        )

        body = self._post(CREATE_TRANSACTION_PATH, payload, operation="inquiry")
        response = self._parse(TransactionResponse, body, operation="inquiry")

        if response.statusCode != STATUS_SUCCESS:
            raise ApiError(
                f"error creating transaction: {response.statusMessage}",
                remote_code=response.statusCode,
                remote_message=response.statusMessage,
                operation="inquiry",
            )
        return response

    def check_transaction(self, merchant_order_id: str) -> TransactionStatusResponse:
        # Pending, failed and cancelled are valid answers here; callers inspect statusCode.
        if not merchant_order_id:
            raise ValidationError("merchantOrderId is required")

        request = CheckTransactionRequest(
            merchantCode=self.merchant_code,
            merchantOrderId=merchant_order_id,
            signature=transaction_status_signature(
                merchant_code=self.merchant_code,
                merchant_order_id=merchant_order_id,
                api_key=self.credentials.api_key,
            ),
        )
        body = self._post(TRANSACTION_STATUS_PATH, request.model_dump(mode="json"), operation="transactionStatus")
        return self._parse(TransactionStatusResponse, body, operation="transactionStatus")

    # Inbound

    def parse_callback(self, form: Mapping[str, str]) -> CallbackData:
        return callback_service.parse_and_verify(form, self.credentials.api_key)

    def verify_callback_signature(self, data: CallbackData) -> bool:
        return callback_service.verify_callback_signature(data, self.credentials.api_key)

    def handle_callback(self, form: Mapping[str, str], handler: CallbackHandler) -> CallbackOutcome:
        return callback_service.handle_callback(
            form,
            api_key=self.credentials.api_key,
            handler=handler,
            logger=self.logger,
        )

    async def handle_callback_async(self, form: Mapping[str, str], handler: CallbackHandler) -> CallbackOutcome:
        return await callback_service.handle_callback_async(
            form,
            api_key=self.credentials.api_key,
            handler=handler,
            logger=self.logger,
        )

    # Wire

    def _post(self, path: str, payload: dict[str, Any], *, operation: str) -> dict[str, Any]:
        if self.log_requests:
            self.logger.info("duitku request operation=%s method=POST path=%s body=%s", operation, path, payload)

        response = self.transport.send("POST", path, payload)

        if self.log_requests:
            self.logger.info(
                "duitku response operation=%s status=%s body=%s",
                operation,
                response.status_code,
                response.text,
            )

        if response.status_code != 200:
            self._raise_for_error_response(response, operation=operation)

        body = self._decode(response, operation=operation)
        if not isinstance(body, dict):
            raise DecodingError(
                "Duitku API returned unexpected payload type",
                details={"operation": operation, "httpStatus": response.status_code},
            )
        return body

    @staticmethod
    def _decode(response: TransportResponse, *, operation: str) -> Any:
        try:
            return json.loads(response.content)
        except ValueError as exc:
            raise DecodingError(
                "Duitku API returned invalid JSON",
                details={"operation": operation, "httpStatus": response.status_code},
            ) from exc

    @staticmethod
    def _raise_for_error_response(response: TransportResponse, *, operation: str) -> None:
        try:
            body = json.loads(response.content)
        except ValueError as exc:
            raise DecodingError(
                f"error decoding error response (HTTP {response.status_code})",
                details={"operation": operation, "httpStatus": response.status_code, "raw": response.text[:500]},
            ) from exc

        if not isinstance(body, dict):
            raise DecodingError(
                f"unexpected error response (HTTP {response.status_code})",
                details={"operation": operation, "httpStatus": response.status_code},
            )

        code = _first_text(body, _ERROR_CODE_KEYS) or str(response.status_code)
        message = _first_text(body, _ERROR_MESSAGE_KEYS) or "unknown error"
        raise ApiError(
            f"{code}: {message}",
            remote_code=code,
            remote_message=message,
            http_status=response.status_code,
            operation=operation,
        )

    @staticmethod
    def _parse(model: type[ModelT], body: dict[str, Any], *, operation: str) -> ModelT:
        try:
            return model.model_validate(body)
        except pydantic.ValidationError as exc:
            raise DecodingError(
                f"Duitku {operation} response has unexpected shape",
                details={
                    "operation": operation,
                    "errors": exc.errors(include_url=False, include_context=False, include_input=False),
                },
            ) from exc


@lru_cache(maxsize=1)
def get_duitku_client() -> DuitkuClient:
    return DuitkuClient.from_settings(get_settings())


def reset_duitku_client() -> None:
    get_duitku_client.cache_clear()
