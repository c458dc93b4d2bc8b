"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# Generation parameters sent with every job; fixed at build time.
DEFAULT_TOP_K = 50
DEFAULT_TOP_P = 0.9
DEFAULT_TEMPERATURE = 0.6
DEFAULT_MAX_NEW_TOKENS = 1024
DEFAULT_PROMPT_TEMPLATE = "<s>[INST] {prompt} [/INST] "


@dataclass(frozen=True, slots=True)
class PromptRequest:
    """Inbound prompt. Empty strings are forwarded untouched."""

    prompt: str


@dataclass(frozen=True, slots=True)
class ProviderJobInput:
    """The ``input`` object of a Replicate prediction request."""

    prompt: str
    top_k: int = DEFAULT_TOP_K
    top_p: float = DEFAULT_TOP_P
    temperature: float = DEFAULT_TEMPERATURE
    max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS
    prompt_template: str = DEFAULT_PROMPT_TEMPLATE
    presence_penalty: float = 0
    frequency_penalty: float = 0

    @classmethod
    def for_prompt(cls, request: PromptRequest) -> ProviderJobInput:
        return cls(prompt=request.prompt)

    def to_payload(self) -> dict[str, Any]:
        """Return the request body as sent on the wire."""
        return {"input": asdict(self)}


@dataclass(frozen=True, slots=True)
class ProviderJobHandle:
    """Locators returned by a successful job submission."""

    fetch_url: str
    cancel_url: str = ""


@dataclass(frozen=True, slots=True)
class GatewayResponse:
    """Raw result of the fetch call, passed back to the inbound caller as-is."""

    body: bytes
    status_code: int = 200
