"""Shared observability helpers used across the accelerator services."""

from .logging import current_log_context, log_context, setup_logging
from .metrics import observe_agent_call, observe_provider_response, setup_fastapi_metrics

__all__ = [
    "setup_logging",
    "log_context",
    "current_log_context",
    "setup_fastapi_metrics",
    "observe_agent_call",
    "observe_provider_response",
]
