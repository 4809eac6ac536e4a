"""Scripted LLM provider used to drive agents and AI routes in tests."""

from __future__ import annotations

from typing import AsyncIterator, Iterable, Union

from accelerator_observability import current_log_context
from accelerator_providers import (
    LLMProvider,
    ProviderCapabilities,
    ProviderChunk,
    ProviderRequest,
    ProviderResponse,
    TokenUsage,
)

Reply = Union[str, Exception]


class ScriptedProvider(LLMProvider):
    """Return queued replies in order and record every request.

    A queued exception is raised instead of answering. Streaming splits the
    next reply into ``chunk_size`` pieces.
    ``log_contexts`` keeps the bound log context seen by each call.
    """

    name = "scripted"

    def __init__(
        self,
        replies: Iterable[Reply] = (),
        *,
        json_mode: bool = True,
        chunk_size: int = 8,
    ) -> None:
        self.replies: list[Reply] = list(replies)
        self.requests: list[ProviderRequest] = []
        self.log_contexts: list[dict] = []
        self.json_mode = json_mode
        self.chunk_size = chunk_size

    @property
    def model(self) -> str:
        return "scripted-model"

    def capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(supports_json_mode=self.json_mode, supports_streaming=True)

    def _next(self, request: ProviderRequest) -> str:
        self.requests.append(request)
        self.log_contexts.append(current_log_context())
        if not self.replies:
            raise AssertionError("ScriptedProvider ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def complete(self, request: ProviderRequest) -> ProviderResponse:
        text = self._next(request)
        return ProviderResponse(
            content=text,
            model=request.model or self.model,
            provider=self.name,
            usage=TokenUsage(prompt_tokens=10, completion_tokens=self.estimate_tokens(text)),
            cost_usd=0.0,
            latency_ms=1.0,
        )

    async def stream(self, request: ProviderRequest) -> AsyncIterator[ProviderChunk]:
        text = self._next(request)
        for start in range(0, len(text), self.chunk_size):
            yield ProviderChunk(delta=text[start : start + self.chunk_size])
        yield ProviderChunk(finish_reason="stop", usage=TokenUsage(prompt_tokens=10))
