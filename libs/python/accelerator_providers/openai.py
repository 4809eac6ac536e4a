"""OpenAI chat completions provider implementation."""

from __future__ import annotations

import logging
import time
from typing import Any, AsyncIterator, Dict, List

import openai
from openai import AsyncOpenAI

from .base import (
    FinishReason,
    LLMProvider,
    ProviderCapabilities,
    ProviderChunk,
    ProviderRequest,
    ProviderResponse,
    TokenUsage,
)
from .config import ProviderConfig
from .exceptions import (
    ContextLengthError,
    ProviderAuthError,
    ProviderError,
    ProviderResponseError,
    RateLimitError,
)
from .pricing import estimate_cost

logger = logging.getLogger(__name__)

CONTEXT_WINDOWS = {
    "gpt-4o-mini": 128_000,
    "gpt-4o": 128_000,
    "gpt-4-turbo": 128_000,
}


def map_finish_reason(reason: str | None) -> FinishReason:
    if reason in ("function_call", "tool_calls"):
        return "tool_calls"
    if reason == "length":
        return "length"
    return "stop"


def _retry_after(exc: Exception) -> float | None:
    response = getattr(exc, "response", None)
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    raw = headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _error_code(exc: Exception) -> str | None:
    code = getattr(exc, "code", None)
    if code:
        return str(code)
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        nested = body.get("error") if isinstance(body.get("error"), dict) else body
        value = nested.get("code")
        return str(value) if value else None
    return None


def classify_openai_error(exc: Exception, provider: str = "openai") -> ProviderError:
    """Translate an SDK exception into the provider error taxonomy."""

    if isinstance(exc, ProviderError):
        return exc
    status = getattr(exc, "status_code", None)
    code = _error_code(exc)
    message = str(exc) or exc.__class__.__name__

    if status == 429 or code == "rate_limit_exceeded":
        return RateLimitError(message, provider=provider, retry_after=_retry_after(exc), status_code=status)
    if status == 401 or code == "invalid_api_key":
        return ProviderAuthError(message, provider=provider, status_code=status)
    if code == "context_length_exceeded":
        return ContextLengthError(message, provider=provider, status_code=status)
    if isinstance(exc, openai.APIConnectionError):
        return ProviderError(message, provider=provider, code="connection_error", retryable=True)
    return ProviderError(
        message,
        provider=provider,
        code=code,
        retryable=status is not None and status >= 500,
        status_code=status,
    )


class OpenAIProvider(LLMProvider):
    name = "openai"

    def __init__(self, config: ProviderConfig, client: AsyncOpenAI | None = None) -> None:
        self._config = config
        self._client = client or AsyncOpenAI(api_key=config.api_key)

    @property
    def model(self) -> str:
        return self._config.model

    async def is_available(self) -> bool:
        """Look the configured model up; no tokens are billed."""

        try:
            await self._client.models.retrieve(self.model)
        except openai.OpenAIError as exc:
            error = classify_openai_error(exc, self.name)
            logger.warning(
                "Provider availability check failed",
                extra={"provider": self.name, "code": error.code, "status_code": error.status_code},
            )
            return False
        return True

    def capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(
            supports_json_mode=True,
            supports_streaming=True,
            supports_tool_calls=True,
            context_window=CONTEXT_WINDOWS.get(self._config.model),
            max_output_tokens=self._config.settings.max_output_tokens,
        )

    def _build_params(self, request: ProviderRequest) -> Dict[str, Any]:
        settings = self._config.settings
        messages: List[Dict[str, Any]] = [
            {"role": message.role, "content": message.content} for message in request.messages
        ]
        params: Dict[str, Any] = {
            "model": request.model or self._config.model,
            "messages": messages,
            "temperature": request.temperature if request.temperature is not None else settings.temperature,
        }

        top_p = request.top_p if request.top_p is not None else settings.top_p
        if top_p is not None:
            params["top_p"] = top_p

        max_tokens = request.max_tokens if request.max_tokens is not None else settings.max_output_tokens
        if max_tokens:
            params["max_tokens"] = max_tokens

        if request.json_schema:
            params["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": "structured", "schema": request.json_schema},
            }
        elif settings.json_mode:
            params["response_format"] = {"type": "json_object"}
        return params

    async def complete(self, request: ProviderRequest) -> ProviderResponse:
        params = self._build_params(request)

        start = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(**params)
        except openai.OpenAIError as exc:
            raise classify_openai_error(exc, self.name) from exc
        latency_ms = (time.perf_counter() - start) * 1000

        try:
            choice = response.choices[0]
            text = choice.message.content or ""
        except (IndexError, AttributeError) as err:
            raise ProviderResponseError("OpenAI response missing content", provider=self.name) from err

        usage = getattr(response, "usage", None)
        token_usage = TokenUsage(
            prompt_tokens=getattr(usage, "prompt_tokens", 0) if usage else 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) if usage else 0,
        )
        model = getattr(response, "model", None) or params["model"]

        return ProviderResponse(
            content=text,
            model=model,
            provider=self.name,
            usage=token_usage,
            finish_reason=map_finish_reason(getattr(choice, "finish_reason", None)),
            cost_usd=estimate_cost(
                provider=self.name,
                model=model,
                prompt_tokens=token_usage.prompt_tokens,
                completion_tokens=token_usage.completion_tokens,
            ),
            latency_ms=latency_ms,
            raw=response,
        )

    async def stream(self, request: ProviderRequest) -> AsyncIterator[ProviderChunk]:
        params = self._build_params(request)
        params["stream"] = True
        params["stream_options"] = {"include_usage": True}

        finish_reason: FinishReason = "stop"
        usage: TokenUsage | None = None
        try:
            response = await self._client.chat.completions.create(**params)
            async for chunk in response:
                if getattr(chunk, "usage", None):
                    usage = TokenUsage(
                        prompt_tokens=chunk.usage.prompt_tokens or 0,
                        completion_tokens=chunk.usage.completion_tokens or 0,
                    )
                if not chunk.choices:
                    continue
                choice = chunk.choices[0]
                if choice.finish_reason:
                    finish_reason = map_finish_reason(choice.finish_reason)
                delta = getattr(choice.delta, "content", None)
                if delta:
                    yield ProviderChunk(delta=delta)
        except openai.OpenAIError as exc:
            raise classify_openai_error(exc, self.name) from exc

        yield ProviderChunk(finish_reason=finish_reason, usage=usage)
