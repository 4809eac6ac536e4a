"""Configuration models and helpers for provider selection."""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ProviderConfigError

PROVIDER_ENV_VAR = "LLM_PROVIDER"
DEFAULT_PROVIDER = "openai"
DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "mock": "mock",
}
# Providers that never talk to a remote API and therefore need no key.
KEYLESS_PROVIDERS = frozenset({"mock"})


class ProviderSettings(BaseModel):
    """Per-call default parameters."""

    temperature: float = Field(0.7, ge=0, le=2)
    max_output_tokens: int | None = Field(None, ge=16)
    top_p: float | None = Field(None, ge=0, le=1)
    json_mode: bool = Field(False)


class ProviderConfig(BaseModel):
    """Configuration for a single provider instance."""

    model_config = ConfigDict(frozen=True)

    name: str
    api_key: str
    model: str
    settings: ProviderSettings = Field(default_factory=ProviderSettings)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _parse_optional(raw: Any, cast: type, key: str) -> Any:
    if raw is None or not str(raw).strip():
        return None
    try:
        return cast(str(raw).strip())
    except ValueError as exc:
        raise ProviderConfigError(f"{key} must be a valid {cast.__name__}") from exc


def load_provider_config(
    prefix: str | None = None, environ: Mapping[str, str] | None = None
) -> ProviderConfig:
    """Load configuration from environment variables.

    Args:
        prefix: Optional provider name; defaults to ``LLM_PROVIDER`` (``openai``).
        environ: Mapping to read instead of ``os.environ``.

    Environment variables used (assuming prefix "OPENAI"):
        OPENAI_API_KEY
        OPENAI_MODEL (default ``gpt-4o-mini``)
        OPENAI_TEMPERATURE (optional)
        OPENAI_MAX_OUTPUT_TOKENS (optional)
        OPENAI_TOP_P (optional)
        OPENAI_JSON_MODE (optional boolean)

    Raises:
        ProviderConfigError: If required variables are missing or invalid.
    """

    env = os.environ if environ is None else environ
    provider_name = (prefix or env.get(PROVIDER_ENV_VAR) or DEFAULT_PROVIDER).strip().lower()
    env_prefix = provider_name.upper()

    def read_env(key: str, default: Any | None = None) -> Any:
        return env.get(f"{env_prefix}_{key}", default)

    api_key = read_env("API_KEY") or ""
    if not api_key and provider_name not in KEYLESS_PROVIDERS:
        raise ProviderConfigError(f"{env_prefix}_API_KEY is not configured", provider=provider_name)
    model = read_env("MODEL") or DEFAULT_MODELS.get(provider_name)
    if not model:
        raise ProviderConfigError(f"{env_prefix}_MODEL is not configured", provider=provider_name)

    max_output_tokens = _parse_optional(read_env("MAX_OUTPUT_TOKENS"), int, "MAX_OUTPUT_TOKENS")
    if max_output_tokens is not None and max_output_tokens <= 0:
        max_output_tokens = None

    temperature = _parse_optional(read_env("TEMPERATURE"), float, "TEMPERATURE")
    try:
        settings = ProviderSettings(
            temperature=0.7 if temperature is None else temperature,
            max_output_tokens=max_output_tokens,
            top_p=_parse_optional(read_env("TOP_P"), float, "TOP_P"),
            json_mode=_parse_bool(read_env("JSON_MODE", "false")),
        )
    except ValidationError as exc:
        raise ProviderConfigError(f"Invalid {env_prefix} provider settings: {exc}", provider=provider_name) from exc

    return ProviderConfig(name=provider_name, api_key=api_key or provider_name, model=model, settings=settings)
