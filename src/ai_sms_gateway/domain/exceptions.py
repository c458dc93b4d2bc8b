"""Domain exception hierarchy.

Inner layers raise these; the interface layer maps every one of them to the
same generic ``500`` response and keeps the detail for the log.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base exception for the entire application."""


# ── Configuration ───────────────────────────────────────────────────────────


class InvalidProxyURLError(GatewayError):
    """``HTTP_PROXY`` / ``HTTPS_PROXY`` is set but is not a usable URL."""


# ── Transport / wire errors ─────────────────────────────────────────────────


class TransportError(GatewayError):
    """Connection failure, timeout or malformed request URL."""


class ResponseReadError(GatewayError):
    """The response started but its body could not be read."""


class ResponseDecodeError(GatewayError):
    """The response body is not the JSON shape we expected."""


# ── Provider errors ─────────────────────────────────────────────────────────


class ProviderError(GatewayError):
    """The provider rejected the job submission (any status other than 201)."""

    def __init__(self, title: str, detail: str, status: int) -> None:
        self.title = title
        self.detail = detail
        self.status = status
        super().__init__(f"Provider error {status}: {title or 'untitled'}: {detail}")


class ResultStatusError(GatewayError):
    """The result fetch returned a non-2xx status."""

    def __init__(self, status: int, body_excerpt: str = "") -> None:
        self.status = status
        self.body_excerpt = body_excerpt
        super().__init__(f"Result fetch returned HTTP {status}: {body_excerpt}")
