"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import FileResponse, PlainTextResponse

from ai_sms_gateway.domain.entities import GatewayResponse
from ai_sms_gateway.infrastructure.config import Settings
from ai_sms_gateway.interface.dependencies import get_gateway, get_settings_from_app
from ai_sms_gateway.services.generate_content import SmsContentGateway

logger = logging.getLogger(__name__)

router = APIRouter()

_DISCONNECT_POLL_SECONDS = 0.25
# nginx convention for "client closed request"
_CLIENT_CLOSED_REQUEST = 499


@router.get("/", include_in_schema=False, response_model=None)
async def index(
    settings: Settings = Depends(get_settings_from_app),
) -> FileResponse | PlainTextResponse:
    """Serve the static landing page."""
    if not settings.index_file.is_file():
        logger.warning("Landing page %s not found", settings.index_file)
        return PlainTextResponse("Not Found", status_code=404)
    return FileResponse(settings.index_file, media_type="text/html")


@router.get(
    "/getAiSmsContent",
    response_class=Response,
    responses={
        200: {"content": {"application/json": {}}, "description": "Raw provider result"},
        500: {"content": {"text/plain": {}}, "description": "Generation failed"},
    },
)
async def get_ai_sms_content(
    request: Request,
    prompt: str = "",
    gateway: SmsContentGateway = Depends(get_gateway),
) -> Response:
    """Generate SMS content for *prompt* and pass the provider's result through."""
    logger.info("Received request for AI SMS content with prompt: %s", prompt)
    result = await _run_until_disconnect(request, gateway.generate(prompt))
    if result is None:
        return Response(status_code=_CLIENT_CLOSED_REQUEST)
    return Response(content=result.body, media_type="application/json")


async def _run_until_disconnect(
    request: Request, coro: Coroutine[Any, Any, GatewayResponse]
) -> GatewayResponse | None:
    """Await *coro*, cancelling it (and its outbound calls) if the client leaves.

    Returns ``None`` when the client disconnected first.
    """
    task = asyncio.create_task(coro)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=_DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Client disconnected; cancelling in-flight provider calls")
                task.cancel()
                await asyncio.wait({task})
                if not task.cancelled() and task.exception() is not None:
                    logger.info(
                        "Generation ended before cancellation took effect: %s",
                        task.exception(),
                    )
                return None
    finally:
        if not task.done():
            task.cancel()
