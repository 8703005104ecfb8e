from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from starlette.concurrency import run_in_threadpool

from duitku_api.constants.duitku import CALLBACK_ACKNOWLEDGEMENT, STATUS_SUCCESS
from duitku_api.core.exceptions import DuitkuError, InvalidSignatureError, MissingFieldsError
from duitku_api.schemas.callback import REQUIRED_CALLBACK_FIELDS, CallbackData
from duitku_api.services.signing import callback_signature, signatures_match

logger = logging.getLogger(__name__)

# Plain callables and ``async def`` functions are both accepted.
CallbackHandler = Callable[[CallbackData], object]


@dataclass(frozen=True)
class CallbackOutcome:
    status_code: int
    body: str
    data: CallbackData | None = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def _form_value(form: Mapping[str, str], name: str) -> str:
    value = form.get(name)
    return value if isinstance(value, str) else ""


def verify_callback_signature(data: CallbackData, api_key: str) -> bool:
    expected = callback_signature(
        merchant_code=data.merchantCode,
        amount=data.amount,
        merchant_order_id=data.merchantOrderId,
        api_key=api_key,
    )
    return signatures_match(expected, data.signature)


def parse_and_verify(form: Mapping[str, str], api_key: str) -> CallbackData:
    """Build a ``CallbackData`` from raw form fields and check its signature.

    Raises ``MissingFieldsError`` before any hashing when a required field is
    absent or empty, and ``InvalidSignatureError`` when the signature does not
    match ``MD5(merchantCode + amount + merchantOrderId + apiKey)``.
    """
    missing = [name for name in REQUIRED_CALLBACK_FIELDS if not _form_value(form, name)]
    if missing:
        raise MissingFieldsError(missing)

    data = CallbackData(**{name: _form_value(form, name) for name in CallbackData.model_fields})

    if not verify_callback_signature(data, api_key):
        logger.warning(
            "Rejected Duitku callback with invalid signature merchantOrderId=%s reference=%s",
            data.merchantOrderId,
            data.reference,
        )
        raise InvalidSignatureError(
            "invalid callback signature",
            details={"merchantOrderId": data.merchantOrderId},
        )
    return data


def is_successful(data: CallbackData) -> bool:
    return data.resultCode == STATUS_SUCCESS


def _verify_for_handler(
    form: Mapping[str, str],
    api_key: str,
    log: logging.Logger,
) -> CallbackData | CallbackOutcome:
    try:
        return parse_and_verify(form, api_key)
    except DuitkuError as exc:
        log.info("Duitku callback rejected: %s", exc)
        return CallbackOutcome(status_code=400, body=str(exc))


def _handler_failed(data: CallbackData, exc: Exception, log: logging.Logger) -> CallbackOutcome:
    log.exception("Callback handler failed for merchantOrderId=%s", data.merchantOrderId)
    return CallbackOutcome(status_code=500, body=str(exc), data=data)


def handle_callback(
    form: Mapping[str, str],
    *,
    api_key: str,
    handler: CallbackHandler,
    logger: logging.Logger | None = None,
) -> CallbackOutcome:
    """Verify a callback form and run a synchronous ``handler`` on it.

    Coroutine handlers must go through ``handle_callback_async``; passing one
    here yields a 500.
    """
    log = logger if logger is not None else logging.getLogger(__name__)
    verified = _verify_for_handler(form, api_key, log)
    if isinstance(verified, CallbackOutcome):
        return verified

    try:
        result = handler(verified)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise TypeError("async callback handler requires handle_callback_async")
    except Exception as exc:
        return _handler_failed(verified, exc, log)

    return CallbackOutcome(status_code=200, body=CALLBACK_ACKNOWLEDGEMENT, data=verified)


async def handle_callback_async(
    form: Mapping[str, str],
    *,
    api_key: str,
    handler: CallbackHandler,
    logger: logging.Logger | None = None,
) -> CallbackOutcome:
    """Same contract as ``handle_callback`` for use inside an event loop.

    ``async def`` handlers are awaited; plain callables run in the threadpool.
    """
    log = logger if logger is not None else logging.getLogger(__name__)
    verified = _verify_for_handler(form, api_key, log)
    if isinstance(verified, CallbackOutcome):
        return verified

    try:
        if inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(getattr(handler, "__call__", None)):
            await handler(verified)
        else:
            result = await run_in_threadpool(handler, verified)
            if inspect.isawaitable(result):
                await result
    except Exception as exc:
        return _handler_failed(verified, exc, log)

    return CallbackOutcome(status_code=200, body=CALLBACK_ACKNOWLEDGEMENT, data=verified)
