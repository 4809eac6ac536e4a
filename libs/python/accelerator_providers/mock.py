"""Offline provider that answers instantly with canned text, streaming included."""

from __future__ import annotations

import json
from typing import AsyncIterator

from .base import (
    LLMProvider,
    ProviderCapabilities,
    ProviderChunk,
    ProviderRequest,
    ProviderResponse,
    TokenUsage,
)
from .config import ProviderConfig, ProviderSettings

CANNED_REPLY = "Mock response from the offline provider."
STREAM_CHUNK_SIZE = 16


class MockProvider(LLMProvider):
    name = "mock"

    def __init__(self, config: ProviderConfig | None = None) -> None:
        if config is None:
            settings = ProviderSettings(temperature=0.1, json_mode=False)
            config = ProviderConfig(name="mock", api_key="mock", model="mock", settings=settings)
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    def capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(
            supports_json_mode=True,
            supports_streaming=True,
            supports_tool_calls=False,
            context_window=32000,
            max_output_tokens=2000,
        )

    def _render(self, request: ProviderRequest) -> str:
        prompt = request.messages[-1].content if request.messages else ""
        if request.json_schema:
            return json.dumps({"message": CANNED_REPLY, "echo": prompt[:50]})
        return f"{CANNED_REPLY}\nPrompt: {prompt[:80]}"

    async def complete(self, request: ProviderRequest) -> ProviderResponse:
        text = self._render(request)
        return ProviderResponse(
            content=text,
            model=request.model or self.model,
            provider=self.name,
            usage=TokenUsage(
                prompt_tokens=self.estimate_tokens(request.text()),
                completion_tokens=self.estimate_tokens(text),
            ),
            cost_usd=0.0,
            latency_ms=1.0,
            raw={"mock": True},
        )

    async def stream(self, request: ProviderRequest) -> AsyncIterator[ProviderChunk]:
        text = self._render(request)
        for start in range(0, len(text), STREAM_CHUNK_SIZE):
            yield ProviderChunk(delta=text[start : start + STREAM_CHUNK_SIZE])
        yield ProviderChunk(
            finish_reason="stop",
            usage=TokenUsage(
                prompt_tokens=self.estimate_tokens(request.text()),
                completion_tokens=self.estimate_tokens(text),
            ),
        )
