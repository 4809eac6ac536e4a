"""Suggestion agent: venture analysis, topic ideas, schedule, next steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from accelerator_schemas.enums import AgentKind
from accelerator_schemas.models.generation import (
    NextStepBatch,
    PostingSchedule,
    TopicSuggestion,
    TopicSuggestionBatch,
    VentureInsights,
)

from ..base import BaseAgent
from .prompts import (
    ANALYZE_VENTURE_PROMPT,
    ANALYZE_VENTURE_SYSTEM_PROMPT,
    LIMITED_INFO_NOTE,
    NEXT_STEPS_PROMPT,
    NEXT_STEPS_SYSTEM_PROMPT,
    SUGGEST_SCHEDULE_PROMPT,
    SUGGEST_SCHEDULE_SYSTEM_PROMPT,
    SUGGEST_TOPICS_PROMPT,
    SUGGEST_TOPICS_SYSTEM_PROMPT,
)

DEFAULT_TEMPERATURE = 0.3
TOPICS_TEMPERATURE = 0.7
MIN_TOPICS = 1
MAX_TOPICS = 10
DEFAULT_TOPIC_COUNT = 5
DRAFT_EXCERPT_CHARS = 500


@dataclass(slots=True)
class VentureContext:
    venture_name: str
    industry: str | None = None
    target_audience: Sequence[str] = field(default_factory=list)
    website: str | None = None


class SuggestionAgent(BaseAgent):
    kind = AgentKind.SUGGESTION

    def __init__(self, provider, **kwargs) -> None:
        kwargs.setdefault("temperature", DEFAULT_TEMPERATURE)
        super().__init__(provider, **kwargs)

    async def analyze_venture(
        self,
        venture_name: str,
        *,
        website: str | None = None,
        description: str | None = None,
    ) -> VentureInsights:
        details = []
        if website:
            details.append(f"Website: {website}")
        if description:
            details.append(f"Description: {description}")
        if not details:
            details.append(LIMITED_INFO_NOTE)
        request = self.build_request(
            ANALYZE_VENTURE_SYSTEM_PROMPT,
            ANALYZE_VENTURE_PROMPT.format(venture_name=venture_name, details="\n".join(details) + "\n"),
            operation="analyze_venture",
            max_tokens=1000,
        )
        async with self.track("analyze_venture"):
            return await self.complete_structured(request, VentureInsights)

    async def suggest_topics(
        self, context: VentureContext, count: int = DEFAULT_TOPIC_COUNT
    ) -> list[TopicSuggestion]:
        if not MIN_TOPICS <= count <= MAX_TOPICS:
            raise ValueError(f"count must be between {MIN_TOPICS} and {MAX_TOPICS}")
        request = self.build_request(
            SUGGEST_TOPICS_SYSTEM_PROMPT,
            SUGGEST_TOPICS_PROMPT.format(
                count=count,
                venture_name=context.venture_name,
                industry=context.industry or "Unknown",
                audience=", ".join(context.target_audience) or "General professional audience",
            ),
            operation="suggest_topics",
            temperature=TOPICS_TEMPERATURE,
            max_tokens=2000,
        )
        async with self.track("suggest_topics"):
            batch = await self.complete_structured(request, TopicSuggestionBatch, list_field="topics")
        return batch.topics[:count]

    async def suggest_schedule(self, context: VentureContext) -> PostingSchedule:
        request = self.build_request(
            SUGGEST_SCHEDULE_SYSTEM_PROMPT,
            SUGGEST_SCHEDULE_PROMPT.format(
                venture_name=context.venture_name,
                industry=context.industry or "Unknown",
                audience=", ".join(context.target_audience) or "General professionals",
            ),
            operation="suggest_schedule",
            max_tokens=500,
        )
        async with self.track("suggest_schedule"):
            return await self.complete_structured(request, PostingSchedule)

    async def suggest_next_steps(self, draft: str, context: VentureContext) -> list[str]:
        request = self.build_request(
            NEXT_STEPS_SYSTEM_PROMPT,
            NEXT_STEPS_PROMPT.format(
                draft_excerpt=draft[:DRAFT_EXCERPT_CHARS],
                venture_name=context.venture_name,
                industry=context.industry or "General",
            ),
            operation="suggest_next_steps",
            max_tokens=500,
        )
        async with self.track("suggest_next_steps"):
            batch = await self.complete_structured(request, NextStepBatch, list_field="steps")
        return [step.strip() for step in batch.steps if step.strip()]
