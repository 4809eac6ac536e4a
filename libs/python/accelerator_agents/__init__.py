"""LLM-backed agents for drafting posts and suggesting content strategy."""

from .exceptions import AgentOutputError
from .suggestion import SuggestionAgent, VentureContext
from .writing import WritingAgent

__all__ = ["AgentOutputError", "SuggestionAgent", "VentureContext", "WritingAgent"]
