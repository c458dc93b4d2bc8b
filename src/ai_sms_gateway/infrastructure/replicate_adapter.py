"""Replicate predictions API adapter — implements the InferenceProvider port."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import httpx

from ai_sms_gateway.domain.entities import (
    GatewayResponse,
    ProviderJobHandle,
    ProviderJobInput,
)
from ai_sms_gateway.domain.exceptions import (
    GatewayError,
    InvalidProxyURLError,
    ProviderError,
    ResponseDecodeError,
    ResponseReadError,
    ResultStatusError,
    TransportError,
)
from ai_sms_gateway.domain.value_objects import ProxyEndpoint
from ai_sms_gateway.infrastructure.config import DEFAULT_PREDICTIONS_URL

logger = logging.getLogger(__name__)

_JOB_CREATED = 201
_EXCERPT_CHARS = 500

ClientFactory = Callable[[ProxyEndpoint | None, httpx.Timeout], httpx.AsyncClient]


def default_client_factory(
    proxy: ProxyEndpoint | None, timeout: httpx.Timeout
) -> httpx.AsyncClient:
    """Build an outbound client routed through *proxy*.

    ``trust_env`` is off; *proxy* is the only proxy the client may use.
    """
    return httpx.AsyncClient(
        proxy=proxy.url if proxy else None,
        timeout=timeout,
        trust_env=False,
    )


def _excerpt(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")[:_EXCERPT_CHARS]


class ReplicateAdapter:
    """Concrete ``InferenceProvider`` backed by Replicate's predictions API."""

    def __init__(
        self,
        api_token: str,
        predictions_url: str = DEFAULT_PREDICTIONS_URL,
        timeout_seconds: float = 30.0,
        client_factory: ClientFactory = default_client_factory,
    ) -> None:
        self._predictions_url = predictions_url
        self._timeout = httpx.Timeout(timeout_seconds)
        self._client_factory = client_factory
        self._headers: dict[str, str] = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }

    @asynccontextmanager
    async def session(
        self, proxy: ProxyEndpoint | None
    ) -> AsyncIterator[ReplicateSession]:
        """Open one outbound client for the submit + fetch pair."""
        try:
            client = self._client_factory(proxy, self._timeout)
        except (httpx.InvalidURL, ValueError) as exc:
            raise InvalidProxyURLError(
                f"Proxy {proxy.redacted() if proxy else 'None'} rejected by HTTP client: {exc}"
            ) from exc
        async with client:
            yield ReplicateSession(client, self._predictions_url, self._headers)


class ReplicateSession:
    """Submit and fetch calls sharing one client (and so one proxy)."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        predictions_url: str,
        headers: dict[str, str],
    ) -> None:
        self._client = client
        self._predictions_url = predictions_url
        self._headers = headers

    async def submit(self, job_input: ProviderJobInput) -> ProviderJobHandle:
        """POST the job input; expect ``201 Created`` with ``urls.get``."""
        body = json.dumps(job_input.to_payload())
        logger.info("Calling AI service with request body: %s", body)

        resp = await self._send("POST", self._predictions_url, content=body)
        logger.info(
            "AI service response (HTTP %d): %s", resp.status_code, _excerpt(resp.content)
        )

        if resp.status_code != _JOB_CREATED:
            raise self._provider_error(resp)

        handle = self._decode_handle(resp)
        logger.info("Result AI URI: %s", handle.fetch_url)
        return handle

    async def fetch(self, handle: ProviderJobHandle) -> GatewayResponse:
        """GET the fetch locator and return its body untouched."""
        start = time.perf_counter()
        try:
            resp = await self._send("GET", handle.fetch_url)
        except GatewayError:
            logger.warning(
                "Result fetch failed (elapsed %.3fs)", time.perf_counter() - start
            )
            raise
        elapsed = time.perf_counter() - start
        logger.info(
            "Result AI service response (HTTP %d, elapsed %.3fs): %s",
            resp.status_code,
            elapsed,
            _excerpt(resp.content),
        )

        if not resp.is_success:
            raise ResultStatusError(resp.status_code, _excerpt(resp.content))

        return GatewayResponse(body=resp.content, status_code=resp.status_code)

    async def _send(
        self, method: str, url: str, content: str | None = None
    ) -> httpx.Response:
        """Perform one call with the body fully read, translating httpx errors."""
        if not url:
            raise TransportError(f"Malformed request: empty URL for {method}.")

        try:
            async with self._client.stream(
                method, url, headers=self._headers, content=content
            ) as resp:
                try:
                    await resp.aread()
                except httpx.TimeoutException as exc:
                    raise TransportError(
                        f"Timed out reading {method} {url}: {exc}"
                    ) from exc
                except (httpx.HTTPError, httpx.StreamError) as exc:
                    raise ResponseReadError(
                        f"Error reading response from {method} {url}: {exc}"
                    ) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timed out calling {method} {url}: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Network error calling {method} {url}: {exc}") from exc

        return resp

    @staticmethod
    def _provider_error(resp: httpx.Response) -> ProviderError:
        """Build a ProviderError, preferring Replicate's ``{title, detail, status}``."""
        try:
            data = resp.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and ("title" in data or "detail" in data):
            status = data.get("status")
            return ProviderError(
                title=str(data.get("title") or ""),
                detail=str(data.get("detail") or ""),
                status=status if isinstance(status, int) else resp.status_code,
            )

        logger.warning("Unstructured provider error body (HTTP %d)", resp.status_code)
        return ProviderError(
            title=f"HTTP {resp.status_code}",
            detail=_excerpt(resp.content),
            status=resp.status_code,
        )

    @staticmethod
    def _decode_handle(resp: httpx.Response) -> ProviderJobHandle:
        try:
            data = resp.json()
        except ValueError as exc:
            raise ResponseDecodeError(
                f"AI service response is not valid JSON: {exc}"
            ) from exc

        urls = data.get("urls") if isinstance(data, dict) else None
        fetch_url = urls.get("get") if isinstance(urls, dict) else None
        if not isinstance(fetch_url, str):
            raise ResponseDecodeError("AI service response has no 'urls.get' locator.")

        cancel_url = urls.get("cancel")
        return ProviderJobHandle(
            fetch_url=fetch_url,
            cancel_url=cancel_url if isinstance(cancel_url, str) else "",
        )
