from __future__ import annotations

import hashlib
import hmac
from collections.abc import Sequence
from datetime import datetime
from enum import StrEnum

from duitku_api.constants.duitku import REQUEST_DATETIME_FORMAT


class DigestAlgorithm(StrEnum):
    MD5 = "md5"
    SHA256 = "sha256"


_HASHERS = {
    DigestAlgorithm.MD5: hashlib.md5,
    DigestAlgorithm.SHA256: hashlib.sha256,
}


def compute_digest(algorithm: DigestAlgorithm | str, secret: str, fields: Sequence[str]) -> str:
    """Hash ``fields`` concatenated in order, followed by ``secret``.

    Fields are joined without a delimiter and are not normalized; callers must
    pass exactly the values sent on the wire.
    """
    for index, field in enumerate(fields):
        if not isinstance(field, str):
            raise TypeError(f"signature field #{index} must be str, got {type(field).__name__}")
    if not isinstance(secret, str):
        raise TypeError("signature secret must be str")

    hasher = _HASHERS[DigestAlgorithm(algorithm)]
    signature_factor = "".join(fields) + secret
    return hasher(signature_factor.encode("utf-8")).hexdigest()


def signatures_match(expected: str, received: str) -> bool:
    # Senders are free to uppercase the hex digest.
    return hmac.compare_digest(expected.lower().encode("utf-8"), received.lower().encode("utf-8"))


def format_request_datetime(moment: datetime | None = None) -> str:
    moment = datetime.now() if moment is None else moment
    return moment.strftime(REQUEST_DATETIME_FORMAT)


def payment_methods_signature(*, merchant_code: str, amount: int, request_datetime: str, api_key: str) -> str:
    return compute_digest(DigestAlgorithm.SHA256, api_key, (merchant_code, str(amount), request_datetime))


def transaction_signature(*, merchant_code: str, merchant_order_id: str, amount: int, api_key: str) -> str:
    return compute_digest(DigestAlgorithm.MD5, api_key, (merchant_code, merchant_order_id, str(amount)))


def transaction_status_signature(*, merchant_code: str, merchant_order_id: str, api_key: str) -> str:
    return compute_digest(DigestAlgorithm.MD5, api_key, (merchant_code, merchant_order_id))


def callback_signature(*, merchant_code: str, amount: str, merchant_order_id: str, api_key: str) -> str:
    return compute_digest(DigestAlgorithm.MD5, api_key, (merchant_code, amount, merchant_order_id))
