"""Generate-SMS-content use case — the submit-then-fetch orchestration.

This is the single entry point for the business logic.  It depends only on
the :class:`InferenceProvider` and :class:`RequestCounter` ports plus the
proxy resolver; the interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from ai_sms_gateway.domain.entities import (
    GatewayResponse,
    PromptRequest,
    ProviderJobInput,
)
from ai_sms_gateway.domain.exceptions import GatewayError
from ai_sms_gateway.domain.ports.inference_provider import InferenceProvider
from ai_sms_gateway.domain.ports.request_counter import RequestCounter
from ai_sms_gateway.domain.value_objects import ProxyEndpoint
from ai_sms_gateway.services.proxy_resolver import resolve_proxy

logger = logging.getLogger(__name__)


class GenerationState(str, Enum):
    """Per-request progress through the call sequence."""

    IDLE = "idle"
    PROXY_RESOLVED = "proxy_resolved"
    SUBMITTED = "submitted"
    FETCHED = "fetched"
    DONE = "done"
    FAILED = "failed"


class SmsContentGateway:
    """Orchestrates proxy resolution → job submission → result fetch.

    The first failure aborts the remaining steps.  No cancel call is issued
    for the provider-side job on either path; it expires on its own.
    """

    def __init__(
        self,
        provider: InferenceProvider,
        request_counter: RequestCounter,
        proxy_resolver: Callable[[], ProxyEndpoint | None] = resolve_proxy,
    ) -> None:
        self._provider = provider
        self._counter = request_counter
        self._resolve_proxy = proxy_resolver

    async def generate(self, prompt: str) -> GatewayResponse:
        """Run the full sequence for *prompt* and return the raw fetch result."""
        self._counter.increment()
        request = PromptRequest(prompt=prompt)
        state = GenerationState.IDLE

        try:
            proxy = self._resolve_proxy()
            state = self._advance(state, GenerationState.PROXY_RESOLVED)
            if proxy is not None:
                logger.info("Using outbound proxy %s", proxy.redacted())

            async with self._provider.session(proxy) as session:
                handle = await session.submit(ProviderJobInput.for_prompt(request))
                state = self._advance(state, GenerationState.SUBMITTED)

                result = await session.fetch(handle)
                state = self._advance(state, GenerationState.FETCHED)

        except GatewayError as exc:
            logger.error(
                "Generation failed after %s: %s: %s",
                state.value,
                type(exc).__name__,
                exc,
            )
            self._advance(state, GenerationState.FAILED)
            raise

        self._advance(state, GenerationState.DONE)
        return result

    @staticmethod
    def _advance(current: GenerationState, nxt: GenerationState) -> GenerationState:
        logger.debug("Generation state %s → %s", current.value, nxt.value)
        return nxt
