"""Prometheus instrumentation for the API and the LLM agents."""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

if TYPE_CHECKING:  # pragma: no cover
    from accelerator_providers.base import ProviderResponse


HTTP_REQUESTS = Counter(
    "accelerator_http_requests_total",
    "HTTP requests handled, by route template and status code",
    labelnames=("service", "method", "route", "status"),
)
HTTP_LATENCY = Histogram(
    "accelerator_http_request_duration_seconds",
    "Wall time spent serving HTTP requests",
    labelnames=("service", "method", "route"),
)
AGENT_CALLS = Counter(
    "accelerator_agent_calls_total",
    "Agent operations by outcome",
    labelnames=("service", "agent", "operation", "status"),
)
AGENT_LATENCY = Histogram(
    "accelerator_agent_call_duration_seconds",
    "Wall time of agent operations, including repair retries",
    labelnames=("service", "agent", "operation"),
)
LLM_TOKENS = Counter(
    "accelerator_llm_tokens_total",
    "Tokens billed by the LLM provider",
    labelnames=("service", "agent", "provider", "token_type"),
)
LLM_COST = Counter(
    "accelerator_llm_cost_usd_total",
    "Estimated LLM spend in USD",
    labelnames=("service", "agent", "provider"),
)
LLM_LATENCY = Histogram(
    "accelerator_llm_latency_seconds",
    "Provider-reported completion latency",
    labelnames=("service", "agent", "provider"),
)


def _route_template(request: Request) -> str:
    # Templates keep label cardinality bounded; unmatched paths fall back to the raw path.
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def setup_fastapi_metrics(app: FastAPI, service_name: str, endpoint: str = "/metrics") -> None:
    """Time every request and expose the default registry at ``endpoint``."""

    if getattr(app.state, "metrics_configured", False):
        return

    @app.middleware("http")
    async def _record_request(request: Request, call_next):
        started = perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            route = _route_template(request)
            HTTP_REQUESTS.labels(service_name, request.method, route, str(status)).inc()
            HTTP_LATENCY.labels(service_name, request.method, route).observe(perf_counter() - started)

    @app.get(endpoint, include_in_schema=False)
    async def _metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.state.metrics_configured = True


def observe_agent_call(
    agent: str,
    operation: str,
    duration_seconds: float,
    *,
    service_name: str,
    status: str = "success",
) -> None:
    AGENT_LATENCY.labels(service_name, agent, operation).observe(max(duration_seconds, 0.0))
    AGENT_CALLS.labels(service_name, agent, operation, status).inc()


def _non_negative(value: Any) -> bool:
    return isinstance(value, (int, float)) and value >= 0


def observe_provider_response(
    *,
    agent: str,
    provider: str,
    service_name: str,
    response: "ProviderResponse | None",
) -> None:
    """Fold token usage, latency and estimated cost of one completion into the counters."""

    if response is None:
        return

    usage = getattr(response, "usage", None)
    for token_type in ("prompt", "completion"):
        count = getattr(usage, f"{token_type}_tokens", None)
        if _non_negative(count):
            LLM_TOKENS.labels(service_name, agent, provider, token_type).inc(count)

    if _non_negative(response.latency_ms):
        LLM_LATENCY.labels(service_name, agent, provider).observe(response.latency_ms / 1000)
    if _non_negative(response.cost_usd):
        LLM_COST.labels(service_name, agent, provider).inc(response.cost_usd)
