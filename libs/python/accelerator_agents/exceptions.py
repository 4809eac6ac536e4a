"""Errors raised by agents when model output cannot be used."""

from __future__ import annotations


class AgentOutputError(RuntimeError):
    """Structured output stayed invalid after the repair attempt."""

    def __init__(self, message: str, *, agent: str, operation: str, raw: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.agent = agent
        self.operation = operation
        self.raw = raw
