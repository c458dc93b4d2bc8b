"""Prometheus adapter — implements the RequestCounter port."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, start_http_server

REQUESTS_METRIC = "ai_sms_requests"


class PrometheusRequestCounter:
    """``ai_sms_requests_total`` registered in its own (injectable) registry."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self._counter = Counter(
            REQUESTS_METRIC,
            "Total number of AI SMS requests",
            registry=self.registry,
        )

    def increment(self) -> None:
        self._counter.inc()

    @property
    def value(self) -> float:
        return self.registry.get_sample_value(f"{REQUESTS_METRIC}_total") or 0.0

    def serve(self, port: int, addr: str = "0.0.0.0") -> None:
        """Expose ``/metrics`` for this registry on a background listener.

        Raises ``OSError`` if the port cannot be bound.
        """
        start_http_server(port, addr=addr, registry=self.registry)
