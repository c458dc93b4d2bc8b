"""Port: inference provider — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from ai_sms_gateway.domain.entities import (
    GatewayResponse,
    ProviderJobHandle,
    ProviderJobInput,
)
from ai_sms_gateway.domain.value_objects import ProxyEndpoint


class ProviderSession(Protocol):
    """One request's worth of provider calls over a single outbound client."""

    async def submit(self, job_input: ProviderJobInput) -> ProviderJobHandle:
        """Create a prediction job and return its locators."""
        ...

    async def fetch(self, handle: ProviderJobHandle) -> GatewayResponse:
        """Retrieve the job result through the handle's fetch locator."""
        ...


class InferenceProvider(Protocol):
    """Abstract contract for a hosted submit-then-fetch inference API."""

    def session(
        self, proxy: ProxyEndpoint | None
    ) -> AbstractAsyncContextManager[ProviderSession]:
        """Open a session whose calls go through *proxy* (or direct if ``None``)."""
        ...
