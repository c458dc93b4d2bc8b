"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from ai_sms_gateway.domain.ports.inference_provider import InferenceProvider
from ai_sms_gateway.domain.ports.request_counter import RequestCounter
from ai_sms_gateway.infrastructure.config import Settings, get_settings
from ai_sms_gateway.infrastructure.prometheus_counter import PrometheusRequestCounter
from ai_sms_gateway.interface.dependencies import build_gateway
from ai_sms_gateway.interface.error_handlers import register_error_handlers
from ai_sms_gateway.interface.routes import router


def create_app(
    settings: Settings | None = None,
    request_counter: RequestCounter | None = None,
    provider: InferenceProvider | None = None,
) -> FastAPI:
    """Build and wire the FastAPI application.

    Collaborators default to the production ones; tests pass their own.
    """
    settings = settings or get_settings()
    if request_counter is None:
        request_counter = PrometheusRequestCounter()

    app = FastAPI(
        title="AI SMS Gateway",
        version="1.0.0",
        description=(
            "Forwards a prompt to a hosted inference provider, fetches the "
            "prediction result and returns the provider's body unchanged."
        ),
    )
    app.state.settings = settings
    app.state.gateway = build_gateway(settings, request_counter, provider)

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
