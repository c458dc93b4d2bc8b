"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Request

from ai_sms_gateway.domain.ports.inference_provider import InferenceProvider
from ai_sms_gateway.domain.ports.request_counter import RequestCounter
from ai_sms_gateway.infrastructure.config import Settings
from ai_sms_gateway.infrastructure.replicate_adapter import ReplicateAdapter
from ai_sms_gateway.services.generate_content import SmsContentGateway


def build_gateway(
    settings: Settings,
    request_counter: RequestCounter,
    provider: InferenceProvider | None = None,
) -> SmsContentGateway:
    """Assemble the use case, defaulting to the Replicate adapter."""
    if provider is None:
        provider = ReplicateAdapter(
            api_token=settings.replicate_api_token.get_secret_value(),
            predictions_url=settings.replicate_predictions_url,
            timeout_seconds=settings.request_timeout_seconds,
        )
    return SmsContentGateway(provider=provider, request_counter=request_counter)


def get_gateway(request: Request) -> SmsContentGateway:
    """Return the gateway attached to the running application."""
    gateway: SmsContentGateway = request.app.state.gateway
    return gateway


def get_settings_from_app(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings
