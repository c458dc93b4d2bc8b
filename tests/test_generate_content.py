from __future__ import annotations

import httpx
import pytest

from ai_sms_gateway.domain.exceptions import (
    InvalidProxyURLError,
    ProviderError,
    ResultStatusError,
    TransportError,
)
from ai_sms_gateway.domain.value_objects import ProxyEndpoint
from ai_sms_gateway.services.generate_content import SmsContentGateway
from conftest import FETCH_URL, RESULT_BODY, raise_timeout


def _gateway(fake_replicate, counter, **kwargs) -> SmsContentGateway:
    return SmsContentGateway(
        provider=fake_replicate.adapter(), request_counter=counter, **kwargs
    )


@pytest.mark.asyncio
async def test_generate_submits_then_fetches_exact_locator(fake_replicate, counter):
    result = await _gateway(fake_replicate, counter).generate("hello")

    assert [r.method for r in fake_replicate.requests] == ["POST", "GET"]
    assert str(fake_replicate.gets[0].url) == FETCH_URL
    assert result.body == RESULT_BODY
    assert counter.value == 1


@pytest.mark.asyncio
async def test_generate_follows_whatever_locator_the_provider_returns(fake_replicate, counter):
    other = "https://provider/predictions/xyz789"
    fake_replicate.on_submit = lambda request: httpx.Response(
        201, json={"urls": {"get": other, "cancel": other + "/cancel"}}
    )

    await _gateway(fake_replicate, counter).generate("hello")

    assert str(fake_replicate.gets[0].url) == other


@pytest.mark.asyncio
async def test_submit_timeout_aborts_without_fetch(fake_replicate, counter):
    fake_replicate.on_submit = raise_timeout

    with pytest.raises(TransportError):
        await _gateway(fake_replicate, counter).generate("hello")

    assert fake_replicate.gets == []
    assert counter.value == 1


@pytest.mark.asyncio
async def test_non_201_submit_is_never_success(fake_replicate, counter):
    fake_replicate.on_submit = lambda request: httpx.Response(
        422, json={"title": "Invalid input", "detail": "prompt is required", "status": 422}
    )

    with pytest.raises(ProviderError):
        await _gateway(fake_replicate, counter).generate("")

    assert fake_replicate.gets == []


@pytest.mark.asyncio
async def test_fetch_error_status_is_surfaced(fake_replicate, counter):
    fake_replicate.on_fetch = lambda request: httpx.Response(500, text="boom")

    with pytest.raises(ResultStatusError):
        await _gateway(fake_replicate, counter).generate("hello")

    assert counter.value == 1


@pytest.mark.asyncio
async def test_invalid_proxy_blocks_all_outbound_calls(fake_replicate, counter, monkeypatch):
    monkeypatch.setenv("HTTP_PROXY", "::not a url::")

    with pytest.raises(InvalidProxyURLError):
        await _gateway(fake_replicate, counter).generate("hello")

    assert fake_replicate.requests == []
    assert fake_replicate.proxies == []
    assert counter.value == 1


@pytest.mark.asyncio
async def test_resolved_proxy_is_handed_to_the_provider(fake_replicate, counter, monkeypatch):
    monkeypatch.setenv("HTTPS_PROXY", "http://proxy.local:8080")

    await _gateway(fake_replicate, counter).generate("hello")

    (proxy,) = fake_replicate.proxies
    assert proxy == ProxyEndpoint.from_string("http://proxy.local:8080")


@pytest.mark.asyncio
async def test_custom_proxy_resolver_is_used(fake_replicate, counter):
    proxy = ProxyEndpoint.from_string("socks5://127.0.0.1:1080")

    await _gateway(fake_replicate, counter, proxy_resolver=lambda: proxy).generate("hello")

    assert fake_replicate.proxies == [proxy]


@pytest.mark.asyncio
async def test_counter_counts_every_call(fake_replicate, counter):
    gateway = _gateway(fake_replicate, counter)
    await gateway.generate("one")

    fake_replicate.on_submit = raise_timeout
    with pytest.raises(TransportError):
        await gateway.generate("two")

    assert counter.value == 2


@pytest.mark.asyncio
async def test_control_character_proxy_is_a_domain_error(fake_replicate, counter, monkeypatch):
    monkeypatch.setenv("HTTP_PROXY", "http://ho\x01st:1")

    with pytest.raises(InvalidProxyURLError):
        await _gateway(fake_replicate, counter).generate("hi")

    assert fake_replicate.requests == []
