"""Rough USD cost estimates for provider responses.

Prices are list prices per one million tokens as ``(input, output)`` pairs.
Dated snapshots such as ``gpt-4o-mini-2024-07-18`` bill like their base model.
"""

from __future__ import annotations

PRICES_PER_MILLION: dict[str, dict[str, tuple[float, float]]] = {
    "openai": {
        "gpt-4o-mini": (0.15, 0.6),
        "gpt-4o": (2.5, 10.0),
        "gpt-4-turbo": (10.0, 30.0),
    },
}

FREE_PROVIDERS = frozenset({"mock"})


def _price_for(provider: str, model: str) -> tuple[float, float] | None:
    table = PRICES_PER_MILLION.get(provider)
    if not table:
        return None
    if model in table:
        return table[model]
    # Longest base-name match wins so "gpt-4o-mini-..." never bills as "gpt-4o".
    for base in sorted(table, key=len, reverse=True):
        if model.startswith(base + "-"):
            return table[base]
    return None


def estimate_cost(provider: str, model: str, prompt_tokens, completion_tokens) -> float | None:
    """Return the estimated cost in USD, or ``None`` for unpriced models."""

    provider = (provider or "").lower()
    if provider in FREE_PROVIDERS:
        return 0.0
    price = _price_for(provider, (model or "").lower())
    if price is None:
        return None
    input_rate, output_rate = price
    tokens_in = max(float(prompt_tokens or 0), 0.0)
    tokens_out = max(float(completion_tokens or 0), 0.0)
    return round((tokens_in * input_rate + tokens_out * output_rate) / 1_000_000, 6)


__all__ = ["PRICES_PER_MILLION", "estimate_cost"]
