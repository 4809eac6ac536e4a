from .agent import MAX_TOPICS, MIN_TOPICS, SuggestionAgent, VentureContext

__all__ = ["SuggestionAgent", "VentureContext", "MIN_TOPICS", "MAX_TOPICS"]
