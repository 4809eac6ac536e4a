"""Capability-tagged LLM provider abstraction."""

from .base import (
    LLMProvider,
    ProviderCapabilities,
    ProviderChunk,
    ProviderMessage,
    ProviderRequest,
    ProviderResponse,
    TokenUsage,
)
from .config import ProviderConfig, ProviderSettings, load_provider_config
from .exceptions import (
    ContextLengthError,
    ProviderAuthError,
    ProviderConfigError,
    ProviderError,
    ProviderResponseError,
    RateLimitError,
)
from .factory import ProviderFactory
from .mock import MockProvider

__all__ = [
    "LLMProvider",
    "ProviderCapabilities",
    "ProviderChunk",
    "ProviderMessage",
    "ProviderRequest",
    "ProviderResponse",
    "TokenUsage",
    "ProviderConfig",
    "ProviderSettings",
    "load_provider_config",
    "ContextLengthError",
    "ProviderAuthError",
    "ProviderConfigError",
    "ProviderError",
    "ProviderResponseError",
    "RateLimitError",
    "ProviderFactory",
    "MockProvider",
]
