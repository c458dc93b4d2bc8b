"""Shared pytest fixtures for the gateway test-suite.

``FakeReplicate`` scripts the provider behind ``httpx.MockTransport`` so the
real adapter code (headers, status handling, error translation) runs end to
end without the network.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from ai_sms_gateway.domain.value_objects import ProxyEndpoint
from ai_sms_gateway.infrastructure.config import Settings
from ai_sms_gateway.infrastructure.prometheus_counter import PrometheusRequestCounter
from ai_sms_gateway.infrastructure.replicate_adapter import ReplicateAdapter

PREDICTIONS_URL = "https://provider/v1/models/test/predictions"
FETCH_URL = "https://provider/jobs/42"
CANCEL_URL = "https://provider/jobs/42/cancel"
HANDLE_BODY = {"urls": {"get": FETCH_URL, "cancel": CANCEL_URL}}
RESULT_BODY = b'{"output":"hi there"}'

Responder = Callable[[httpx.Request], httpx.Response]


class FakeReplicate:
    """Scripted provider: POST → submit responder, GET → fetch responder."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.proxies: list[ProxyEndpoint | None] = []
        self.timeouts: list[httpx.Timeout] = []
        self.on_submit: Responder = lambda request: httpx.Response(201, json=HANDLE_BODY)
        self.on_fetch: Responder = lambda request: httpx.Response(200, content=RESULT_BODY)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            return self.on_submit(request)
        return self.on_fetch(request)

    def client_factory(
        self, proxy: ProxyEndpoint | None, timeout: httpx.Timeout
    ) -> httpx.AsyncClient:
        self.proxies.append(proxy)
        self.timeouts.append(timeout)
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle), timeout=timeout)

    def adapter(self, token: str = "test-token", **kwargs: Any) -> ReplicateAdapter:
        return ReplicateAdapter(
            api_token=token,
            predictions_url=PREDICTIONS_URL,
            client_factory=self.client_factory,
            **kwargs,
        )

    @property
    def posts(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    @property
    def gets(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]


def raise_timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectTimeout("timed out", request=request)


@pytest.fixture(autouse=True)
def _no_proxy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's proxy settings out of every test."""
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "http_proxy", "https_proxy"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def fake_replicate() -> FakeReplicate:
    return FakeReplicate()


@pytest.fixture()
def counter() -> PrometheusRequestCounter:
    return PrometheusRequestCounter()


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        replicate_api_token="test-token",
        replicate_predictions_url=PREDICTIONS_URL,
        log_file=str(tmp_path / "test.log"),
        _env_file=None,  # type: ignore[call-arg]
    )
