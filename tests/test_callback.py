from __future__ import annotations

import asyncio
import hashlib
import logging

import pytest

from duitku_api.core.exceptions import InvalidSignatureError, MissingFieldsError, ValidationError
from duitku_api.schemas.callback import REQUIRED_CALLBACK_FIELDS, CallbackData
from duitku_api.services import callback as callback_service
from duitku_api.services.callback import handle_callback, handle_callback_async, is_successful, parse_and_verify
from duitku_api.services.duitku_client import DuitkuClient

API_KEY = "KEY1"


def _signed_form(**overrides: str) -> dict[str, str]:
    form = {
        "merchantCode": "DXXXX",
        "amount": "40000",
        "merchantOrderId": "ORDER123",
        "productDetail": "Test Product",
        "additionalParam": "",
        "paymentCode": "VC",
        "resultCode": "00",
        "merchantUserId": "user-1",
        "reference": "DEV123456789",
        "publisherOrderId": "MGUS2024",
        "spUserHash": "",
        "settlementDate": "2024-01-02",
        "issuerCode": "93600523",
    }
    form.update(overrides)
    raw = f"{form['merchantCode']}{form['amount']}{form['merchantOrderId']}{API_KEY}"
    form.setdefault("signature", hashlib.md5(raw.encode("utf-8")).hexdigest())
    return form


def test_parse_and_verify_returns_populated_record() -> None:
    form = _signed_form()
    data = parse_and_verify(form, API_KEY)

    assert data.merchantCode == "DXXXX"
    assert data.amount == "40000"
    assert data.merchantOrderId == "ORDER123"
    assert data.productDetail == "Test Product"
    assert data.paymentCode == "VC"
    assert data.reference == "DEV123456789"
    assert data.publisherOrderId == "MGUS2024"
    assert data.settlementDate == "2024-01-02"
    assert data.issuerCode == "93600523"
    assert data.signature == form["signature"]
    assert data.is_successful() is True


def test_known_callback_vector_verifies() -> None:
    form = {
        "merchantCode": "DXXXX",
        "amount": "40000",
        "merchantOrderId": "ORDER123",
        "resultCode": "00",
        "signature": hashlib.md5(b"DXXXX40000ORDER123KEY1").hexdigest(),
    }
    data = parse_and_verify(form, "KEY1")
    assert is_successful(data)
    # Optional fields are present even when the sender omitted them.
    assert data.reference == ""
    assert data.spUserHash == ""


def test_uppercase_signature_verifies() -> None:
    form = _signed_form()
    form["signature"] = form["signature"].upper()
    assert parse_and_verify(form, API_KEY).merchantOrderId == "ORDER123"


@pytest.mark.parametrize("position", [0, 7, 31])
def test_flipping_one_signature_character_fails(position: int) -> None:
    form = _signed_form()
    signature = form["signature"]
    replacement = "0" if signature[position] != "0" else "1"
    form["signature"] = signature[:position] + replacement + signature[position + 1 :]

    with pytest.raises(InvalidSignatureError):
        parse_and_verify(form, API_KEY)


def test_wrong_secret_fails() -> None:
    with pytest.raises(InvalidSignatureError):
        parse_and_verify(_signed_form(), "OTHER-KEY")


def test_amount_is_hashed_exactly_as_received() -> None:
    form = _signed_form()
    form["amount"] = "40000.00"
    with pytest.raises(InvalidSignatureError):
        parse_and_verify(form, API_KEY)


@pytest.mark.parametrize("missing", REQUIRED_CALLBACK_FIELDS)
def test_missing_required_field_rejected_before_hashing(missing: str, monkeypatch: pytest.MonkeyPatch) -> None:
    def _must_not_hash(**_: str) -> str:
        raise AssertionError("signature computed before presence check")

    monkeypatch.setattr(callback_service, "callback_signature", _must_not_hash)

    form = _signed_form()
    del form[missing]
    with pytest.raises(MissingFieldsError) as exc_info:
        parse_and_verify(form, API_KEY)

    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.fields == [missing]


def test_empty_required_fields_are_all_reported() -> None:
    form = _signed_form(amount="", resultCode="")
    with pytest.raises(MissingFieldsError) as exc_info:
        parse_and_verify(form, API_KEY)
    assert exc_info.value.fields == ["amount", "resultCode"]
    assert "amount" in str(exc_info.value)


@pytest.mark.parametrize(
    ("result_code", "expected"),
    [("00", True), ("01", False), ("02", False), ("0", False), ("000", False), ("", False), (" 00", False)],
)
def test_is_successful_only_for_double_zero(result_code: str, expected: bool) -> None:
    data = CallbackData(
        merchantCode="DXXXX",
        amount="40000",
        merchantOrderId="ORDER123",
        resultCode=result_code,
        signature="x",
    )
    assert is_successful(data) is expected
    assert data.is_successful() is expected


def test_handle_callback_acknowledges_and_invokes_handler() -> None:
    received: list[CallbackData] = []
    outcome = handle_callback(_signed_form(), api_key=API_KEY, handler=received.append)

    assert outcome.status_code == 200
    assert outcome.body == "OK"
    assert outcome.ok
    assert [item.merchantOrderId for item in received] == ["ORDER123"]


def test_handle_callback_returns_400_without_calling_handler() -> None:
    called: list[CallbackData] = []
    form = _signed_form(signature="deadbeef")
    outcome = handle_callback(form, api_key=API_KEY, handler=called.append)

    assert outcome.status_code == 400
    assert "invalid callback signature" in outcome.body
    assert called == []


def test_handle_callback_returns_500_when_handler_fails(caplog: pytest.LogCaptureFixture) -> None:
    def failing_handler(_: CallbackData) -> None:
        raise RuntimeError("database unavailable")

    with caplog.at_level(logging.ERROR):
        outcome = handle_callback(_signed_form(), api_key=API_KEY, handler=failing_handler)

    assert outcome.status_code == 500
    assert outcome.body == "database unavailable"
    assert outcome.data is not None
    assert "Callback handler failed" in caplog.text


def test_invalid_signature_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidSignatureError):
            parse_and_verify(_signed_form(signature="0" * 32), API_KEY)
    assert "invalid signature" in caplog.text


def test_client_binds_callback_verification_to_its_credentials(duitku: DuitkuClient) -> None:
    api_key = duitku.credentials.api_key
    raw = f"DXXXX40000ORDER123{api_key}"
    form = {
        "merchantCode": "DXXXX",
        "amount": "40000",
        "merchantOrderId": "ORDER123",
        "resultCode": "01",
        "signature": hashlib.md5(raw.encode("utf-8")).hexdigest(),
    }

    data = duitku.parse_callback(form)
    assert duitku.verify_callback_signature(data)
    assert not data.is_successful()

    outcome = duitku.handle_callback(form, lambda _: None)
    assert outcome.status_code == 200


def test_handle_callback_async_awaits_coroutine_handler() -> None:
    received: list[CallbackData] = []

    async def store(data: CallbackData) -> None:
        received.append(data)

    outcome = asyncio.run(handle_callback_async(_signed_form(), api_key=API_KEY, handler=store))

    assert outcome.status_code == 200
    assert [item.merchantOrderId for item in received] == ["ORDER123"]


def test_handle_callback_async_returns_500_when_coroutine_handler_fails() -> None:
    ran: list[bool] = []

    async def failing(_: CallbackData) -> None:
        ran.append(True)
        raise RuntimeError("db down")

    outcome = asyncio.run(handle_callback_async(_signed_form(), api_key=API_KEY, handler=failing))

    assert ran == [True]
    assert outcome.status_code == 500
    assert outcome.body == "db down"


def test_handle_callback_async_runs_plain_handler() -> None:
    received: list[CallbackData] = []
    outcome = asyncio.run(handle_callback_async(_signed_form(), api_key=API_KEY, handler=received.append))

    assert outcome.ok
    assert len(received) == 1


def test_handle_callback_async_rejects_bad_signature_without_calling_handler() -> None:
    called: list[CallbackData] = []

    async def store(data: CallbackData) -> None:
        called.append(data)

    outcome = asyncio.run(handle_callback_async(_signed_form(signature="0" * 32), api_key=API_KEY, handler=store))

    assert outcome.status_code == 400
    assert called == []


def test_sync_handle_callback_refuses_coroutine_handler() -> None:
    async def store(_: CallbackData) -> None:
        return None

    outcome = handle_callback(_signed_form(), api_key=API_KEY, handler=store)

    assert outcome.status_code == 500
    assert "handle_callback_async" in outcome.body


def test_handle_callback_logs_to_given_logger(caplog: pytest.LogCaptureFixture) -> None:
    def failing_handler(_: CallbackData) -> None:
        raise RuntimeError("boom")

    custom = logging.getLogger("tests.callbacks")
    with caplog.at_level(logging.ERROR, logger="tests.callbacks"):
        handle_callback(_signed_form(), api_key=API_KEY, handler=failing_handler, logger=custom)

    assert any(record.name == "tests.callbacks" for record in caplog.records)
