from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

# Configure required env vars before importing app settings/app.
os.environ.setdefault("DUITKU_MERCHANT_CODE", "DXXXX")
os.environ.setdefault("DUITKU_API_KEY", "DXXXXCX80TZJ85Q70QCI")
os.environ.setdefault("DUITKU_SANDBOX", "true")
os.environ.setdefault("DUITKU_TIMEOUT_SECONDS", "5")
os.environ.setdefault("DUITKU_LOG_REQUESTS", "false")
os.environ.setdefault("ENABLE_DOCS", "true")

from duitku_api.constants.duitku import Environment  # noqa: E402
from duitku_api.core.config import reset_settings_cache  # noqa: E402
from duitku_api.main import create_app  # noqa: E402
from duitku_api.services.duitku_client import Credentials, DuitkuClient, reset_duitku_client  # noqa: E402

MERCHANT_CODE = os.environ["DUITKU_MERCHANT_CODE"]
API_KEY = os.environ["DUITKU_API_KEY"]


@pytest.fixture(autouse=True)
def _reset_singletons() -> None:
    reset_settings_cache()
    reset_duitku_client()
    yield
    reset_duitku_client()


@pytest.fixture
def duitku() -> DuitkuClient:
    return DuitkuClient(Credentials(merchant_code=MERCHANT_CODE, api_key=API_KEY, environment=Environment.SANDBOX))


@pytest.fixture
def client() -> TestClient:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
