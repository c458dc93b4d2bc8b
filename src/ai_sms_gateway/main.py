from __future__ import annotations
import logging
import sys
import uvicorn
from pydantic import ValidationError
from ai_sms_gateway.infrastructure.config import get_settings
from ai_sms_gateway.infrastructure.logging_setup import configure_logging
from ai_sms_gateway.infrastructure.prometheus_counter import PrometheusRequestCounter
from ai_sms_gateway.interface.app import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    """Start the metrics listener and the uvicorn ASGI server."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        configure_logging(settings.log_level, settings.log_file)
    except OSError as exc:
        print(f"Failed to open log file {settings.log_file}: {exc}", file=sys.stderr)
        sys.exit(1)

    counter = PrometheusRequestCounter()
    logger.info("Starting Prometheus metrics server on :%d", settings.metrics_port)
    try:
        counter.serve(settings.metrics_port, addr=settings.host)
    except OSError as exc:
        logger.critical("Failed to start Prometheus metrics server: %s", exc)
        sys.exit(1)

    logger.info("Starting web server on %s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings=settings, request_counter=counter),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
