"""Core interfaces and dataclasses for provider interactions."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Literal, Mapping, MutableMapping, Sequence

from .exceptions import ProviderError

Role = Literal["system", "user", "assistant"]
FinishReason = Literal["stop", "length", "tool_calls"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProviderMessage:
    role: Role
    content: str


@dataclass(slots=True)
class ProviderRequest:
    """Normalized request passed to providers.

    ``model``, ``temperature`` and ``max_tokens`` fall back to the provider's
    configured defaults when left as ``None``.
    """

    messages: Sequence[ProviderMessage]
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    json_schema: Mapping[str, Any] | None = None
    stream: bool = False
    metadata: MutableMapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_prompts(cls, prompt: str, system_prompt: str | None = None, **kwargs: Any) -> "ProviderRequest":
        messages: list[ProviderMessage] = []
        if system_prompt:
            messages.append(ProviderMessage(role="system", content=system_prompt))
        messages.append(ProviderMessage(role="user", content=prompt))
        return cls(messages=messages, **kwargs)

    def text(self) -> str:
        return "\n".join(message.content for message in self.messages)


@dataclass(slots=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass(slots=True)
class ProviderResponse:
    """Standard response returned by providers."""

    content: str
    model: str
    provider: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    finish_reason: FinishReason = "stop"
    cost_usd: float | None = None
    latency_ms: float | None = None
    raw: Any = None
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(slots=True)
class ProviderChunk:
    """One streamed delta; the final chunk carries usage and finish reason."""

    delta: str = ""
    finish_reason: FinishReason | None = None
    usage: TokenUsage | None = None


@dataclass(slots=True)
class ProviderCapabilities:
    """Capability flags used when choosing a provider."""

    supports_json_mode: bool = False
    supports_streaming: bool = False
    supports_tool_calls: bool = False
    context_window: int | None = None
    max_output_tokens: int | None = None


class LLMProvider(ABC):
    """Abstract base class implemented by concrete providers."""

    name: str

    @abstractmethod
    def capabilities(self) -> ProviderCapabilities:
        """Return capability metadata."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model used when a request does not name one."""

    @abstractmethod
    async def complete(self, request: ProviderRequest) -> ProviderResponse:
        """Generate a full text or JSON response for the request."""

    @abstractmethod
    def stream(self, request: ProviderRequest) -> AsyncIterator[ProviderChunk]:
        """Yield response deltas as they arrive."""

    async def is_available(self) -> bool:
        """Send a five-token completion and report whether the provider answered."""

        request = ProviderRequest.from_prompts("ping", max_tokens=5, metadata={"operation": "availability"})
        try:
            await self.complete(request)
        except ProviderError as exc:
            logger.warning(
                "Provider availability check failed",
                extra={"provider": self.name, "code": exc.code},
            )
            return False
        return True

    def estimate_tokens(self, text: str) -> int:
        """Rough token count (about four characters per token)."""

        if not text:
            return 0
        return math.ceil(len(text) / 4)
