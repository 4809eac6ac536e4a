"""Shared plumbing for agents: provider calls, metrics, structured output."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from time import perf_counter
from typing import AsyncIterator, TypeVar

from pydantic import BaseModel

from accelerator_observability import log_context, observe_agent_call, observe_provider_response
from accelerator_providers import LLMProvider, ProviderMessage, ProviderRequest, ProviderResponse
from accelerator_schemas.enums import AgentKind

from .exceptions import AgentOutputError
from .parsing import StructuredOutputError, parse_structured

T = TypeVar("T", bound=BaseModel)

DEFAULT_SERVICE_NAME = "accelerator-api"

REPAIR_PROMPT = """
Your previous reply could not be used: {error}

Previous reply:
{previous}

Reply again with ONLY valid JSON matching the requested structure. No commentary, no code fences.
""".strip()

logger = logging.getLogger(__name__)


class BaseAgent:
    kind: AgentKind

    def __init__(
        self,
        provider: LLMProvider,
        *,
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        service_name: str = DEFAULT_SERVICE_NAME,
    ) -> None:
        self.provider = provider
        self.model = model or provider.model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.service_name = service_name

    def build_request(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        operation: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_schema: dict | None = None,
        stream: bool = False,
    ) -> ProviderRequest:
        return ProviderRequest(
            messages=[
                ProviderMessage(role="system", content=system_prompt),
                ProviderMessage(role="user", content=user_prompt),
            ],
            model=self.model,
            temperature=self.temperature if temperature is None else temperature,
            max_tokens=self.max_tokens if max_tokens is None else max_tokens,
            json_schema=json_schema,
            stream=stream,
            metadata={"agent": self.kind.value, "operation": operation},
        )

    @asynccontextmanager
    async def track(self, operation: str) -> AsyncIterator[None]:
        """Time one agent operation and record its outcome."""

        start = perf_counter()
        status = "success"
        with log_context(agent=self.kind.value, provider=self.provider.name):
            try:
                yield
            except AgentOutputError:
                status = "invalid_output"
                raise
            except Exception:
                status = "error"
                raise
            finally:
                observe_agent_call(
                    self.kind.value,
                    operation,
                    perf_counter() - start,
                    service_name=self.service_name,
                    status=status,
                )

    async def complete(self, request: ProviderRequest) -> ProviderResponse:
        response = await self.provider.complete(request)
        observe_provider_response(
            agent=self.kind.value,
            provider=response.provider or self.provider.name,
            service_name=self.service_name,
            response=response,
        )
        logger.info(
            "Provider call completed",
            extra={
                "operation": request.metadata.get("operation"),
                "model": response.model,
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "latency_ms": response.latency_ms,
                "cost_usd": response.cost_usd,
            },
        )
        return response

    async def complete_structured(
        self,
        request: ProviderRequest,
        model_cls: type[T],
        *,
        list_field: str | None = None,
    ) -> T:
        """Call the provider and validate JSON output, repairing once on failure."""

        operation = str(request.metadata.get("operation", "unknown"))
        if self.provider.capabilities().supports_json_mode and request.json_schema is None:
            request.json_schema = model_cls.model_json_schema()

        response = await self.complete(request)
        try:
            return parse_structured(response.content, model_cls, list_field=list_field)
        except StructuredOutputError as exc:
            logger.warning(
                "Structured output invalid; requesting repair",
                extra={"operation": operation, "error": str(exc)},
            )
            first_error = exc

        repair = ProviderRequest(
            messages=[
                *request.messages,
                ProviderMessage(role="assistant", content=response.content),
                ProviderMessage(
                    role="user",
                    content=REPAIR_PROMPT.format(error=first_error, previous=response.content[:2000]),
                ),
            ],
            model=request.model,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            json_schema=request.json_schema,
            metadata={**request.metadata, "repair": True},
        )
        repaired = await self.complete(repair)
        try:
            return parse_structured(repaired.content, model_cls, list_field=list_field)
        except StructuredOutputError as exc:
            raise AgentOutputError(
                f"Model returned invalid {model_cls.__name__} output",
                agent=self.kind.value,
                operation=operation,
                raw=repaired.content,
            ) from exc
