from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from duitku_api.constants.duitku import DEFAULT_TIMEOUT_SECONDS
from duitku_api.core.exceptions import TransportError


def compact_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(Protocol):
    base_url: str

    def send(self, method: str, path: str, body: dict[str, Any] | None) -> TransportResponse: ...


class HttpxTransport:
    """Sends JSON requests to the Duitku API with ``httpx``.

    A fresh ``httpx.Client`` is opened per call unless one is injected, in which
    case the caller owns its lifecycle (and its timeout).
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.http_client = http_client

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def send(self, method: str, path: str, body: dict[str, Any] | None) -> TransportResponse:
        url = self.url_for(path)
        content = compact_json(body).encode("utf-8") if body is not None else None
        headers = {"Content-Type": "application/json", "Accept": "application/json"}

        try:
            if self.http_client is not None:
                response = self.http_client.request(method, url, content=content, headers=headers)
            else:
                with httpx.Client(timeout=self.timeout_seconds) as client:
                    response = client.request(method, url, content=content, headers=headers)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Duitku API request timed out: {exc}",
                code="duitku_timeout",
                details={"method": method, "path": path},
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Failed to communicate with Duitku API: {exc}",
                details={"method": method, "path": path, "reason": str(exc)},
            ) from exc

        return TransportResponse(status_code=response.status_code, content=response.content)
