"""Provider construction from a :class:`ProviderConfig`."""

from __future__ import annotations

from typing import Callable

from .base import LLMProvider
from .config import ProviderConfig, load_provider_config
from .exceptions import ProviderConfigError
from .mock import MockProvider
from .openai import OpenAIProvider

ProviderClass = Callable[[ProviderConfig], LLMProvider]


class ProviderFactory:
    """Maps provider names onto the classes that implement them."""

    providers: dict[str, ProviderClass] = {
        "openai": OpenAIProvider,
        "mock": MockProvider,
    }

    @classmethod
    def available(cls) -> list[str]:
        return sorted(cls.providers)

    @classmethod
    def create(cls, config: ProviderConfig | None = None) -> LLMProvider:
        config = config or load_provider_config()
        provider_cls = cls.providers.get(config.name.lower())
        if provider_cls is None:
            raise ProviderConfigError(
                f"Unknown provider: {config.name} (expected one of: {', '.join(cls.available())})",
                provider=config.name,
            )
        return provider_cls(config)
