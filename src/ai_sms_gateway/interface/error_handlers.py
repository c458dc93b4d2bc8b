"""Global exception handlers — translate domain errors to HTTP responses.

Every failure maps to ``500`` with the same fixed plain-text message; the
error detail only ever goes to the log.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from ai_sms_gateway.domain.exceptions import GatewayError, ProviderError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Error getting AI SMS content"


def _error_text(status_code: int, message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> PlainTextResponse:
        if isinstance(exc, ProviderError):
            logger.warning(
                "ProviderError on %s: title=%r detail=%r status=%d",
                request.url.path,
                exc.title,
                exc.detail,
                exc.status,
            )
        else:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return _error_text(500, GENERIC_ERROR_MESSAGE)

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception("Unhandled exception")
        return _error_text(500, GENERIC_ERROR_MESSAGE)
