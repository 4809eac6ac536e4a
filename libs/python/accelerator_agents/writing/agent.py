"""Writing agent that drafts and revises LinkedIn posts."""

from __future__ import annotations

from time import perf_counter
from typing import AsyncIterator, Sequence

from accelerator_observability import observe_agent_call
from accelerator_schemas.enums import AgentKind, WritingTone
from accelerator_schemas.models.generation import GeneratedDraft

from ..base import BaseAgent
from ..exceptions import AgentOutputError
from .prompts import (
    REVISION_SYSTEM_PROMPT,
    REVISION_USER_PROMPT,
    TONE_INSTRUCTIONS,
    WRITING_LENGTH_BLOCK,
    WRITING_OUTLINE_BLOCK,
    WRITING_SYSTEM_PROMPT,
    WRITING_USER_PROMPT,
    WRITING_USER_SUFFIX,
)


def build_system_prompt(tone: WritingTone, brand_voice: str | None = None) -> str:
    tone = WritingTone(tone)
    brand_voice_line = f"- Brand Voice: {brand_voice.strip()}\n" if brand_voice and brand_voice.strip() else ""
    return WRITING_SYSTEM_PROMPT.format(
        tone=tone.value,
        tone_instructions=TONE_INSTRUCTIONS[tone],
        brand_voice_line=brand_voice_line,
    )


def build_user_prompt(
    topic: str,
    outline: Sequence[str] | None = None,
    max_length: int | None = None,
) -> str:
    prompt = WRITING_USER_PROMPT.format(topic=topic)
    steps = [item for item in (outline or []) if item and item.strip()]
    if steps:
        numbered = "\n".join(f"{index}. {item.strip()}" for index, item in enumerate(steps, start=1))
        prompt += WRITING_OUTLINE_BLOCK.format(outline=numbered)
    if max_length:
        prompt += WRITING_LENGTH_BLOCK.format(max_length=max_length)
    return prompt + WRITING_USER_SUFFIX


class WritingAgent(BaseAgent):
    """Generates LinkedIn posts from a topic, tone, and optional brand voice."""

    kind = AgentKind.WRITING

    async def generate(
        self,
        topic: str,
        tone: WritingTone = WritingTone.PROFESSIONAL,
        *,
        brand_voice: str | None = None,
        outline: Sequence[str] | None = None,
        max_length: int | None = None,
    ) -> GeneratedDraft:
        request = self.build_request(
            build_system_prompt(tone, brand_voice),
            build_user_prompt(topic, outline, max_length),
            operation="generate",
        )
        async with self.track("generate"):
            response = await self.complete(request)
        return self._to_draft(response.content, f"LinkedIn post about {topic}", "generate")

    async def generate_stream(
        self,
        topic: str,
        tone: WritingTone = WritingTone.PROFESSIONAL,
        *,
        brand_voice: str | None = None,
        outline: Sequence[str] | None = None,
        max_length: int | None = None,
    ) -> AsyncIterator[str]:
        """Yield text deltas; the iterator is single-use."""

        request = self.build_request(
            build_system_prompt(tone, brand_voice),
            build_user_prompt(topic, outline, max_length),
            operation="generate_stream",
            stream=True,
        )
        start = perf_counter()
        status = "error"
        try:
            async for chunk in self.provider.stream(request):
                if chunk.delta:
                    yield chunk.delta
            status = "success"
        finally:
            observe_agent_call(
                self.kind.value,
                "generate_stream",
                perf_counter() - start,
                service_name=self.service_name,
                status=status,
            )

    async def revise(self, original_draft: str, feedback: str) -> GeneratedDraft:
        request = self.build_request(
            REVISION_SYSTEM_PROMPT,
            REVISION_USER_PROMPT.format(original=original_draft, feedback=feedback),
            operation="revise",
        )
        async with self.track("revise"):
            response = await self.complete(request)
        return self._to_draft(response.content, "Revised LinkedIn post", "revise")

    def _to_draft(self, text: str, alt_text: str, operation: str) -> GeneratedDraft:
        post_text = (text or "").strip()
        if not post_text:
            raise AgentOutputError(
                "Model returned an empty post", agent=self.kind.value, operation=operation, raw=text
            )
        return GeneratedDraft(
            post_text=post_text,
            character_count=len(post_text),
            alt_text=alt_text,
            variants=[],
        )
