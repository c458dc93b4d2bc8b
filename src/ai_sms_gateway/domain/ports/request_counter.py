"""Port: request counter — a metrics sink bumped once per inbound request."""

from __future__ import annotations

from typing import Protocol


class RequestCounter(Protocol):
    """Monotonic counter; ``increment`` must be safe under concurrent calls."""

    def increment(self) -> None:
        ...
