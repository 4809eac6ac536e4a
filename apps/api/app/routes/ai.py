"""LLM-backed endpoints: post generation, revision, and strategy suggestions."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Optional

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse

from accelerator_agents import SuggestionAgent, WritingAgent
from accelerator_observability import log_context
from accelerator_providers import ProviderError
from accelerator_schemas.enums import ContentStatus
from accelerator_schemas.models.venture import BrandGuide, Venture

from ..access import ensure_venture_access
from ..config import ApiSettings
from ..deps import (
    ProviderBuilder,
    RequestContext,
    get_provider_builder,
    get_request_context,
    get_settings,
    get_store,
)
from ..models import (
    AnalyzeVentureRequest,
    GenerateRequest,
    NextStepsRequest,
    ReviseRequest,
    SuggestTopicsRequest,
    VentureContextRequest,
)
from ..store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

HASHTAG_PATTERN = re.compile(r"#\w+")


def extract_hashtags(text: str) -> list[str]:
    seen: list[str] = []
    for tag in HASHTAG_PATTERN.findall(text):
        if tag not in seen:
            seen.append(tag)
    return seen


def describe_brand_voice(venture: Venture, guide: Optional[BrandGuide]) -> Optional[str]:
    if guide is None:
        return None
    parts = [f"{guide.tone.value} voice for {venture.venture_name}"]
    if guide.audience:
        parts.append(f"audience: {', '.join(guide.audience)}")
    if guide.content_pillars:
        parts.append(f"content pillars: {', '.join(guide.content_pillars)}")
    if guide.negative_keywords:
        parts.append(f"never mention: {', '.join(guide.negative_keywords)}")
    return "; ".join(parts)


def sse_event(payload: dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


async def _with_log_context(deltas: AsyncIterator[str], **fields: Any) -> AsyncIterator[str]:
    # Bound per step: a context token must not stay open across a yield.
    iterator = deltas.__aiter__()
    while True:
        with log_context(**fields):
            try:
                delta = await iterator.__anext__()
            except StopAsyncIteration:
                return
        yield delta


async def _event_stream(deltas: AsyncIterator[str], *, user_id: str) -> AsyncIterator[str]:
    fields = {"route": "/ai/generate", "user_id": user_id}
    try:
        async for delta in _with_log_context(deltas, **fields):
            yield sse_event({"delta": delta})
    except ProviderError as exc:
        logger.warning(
            "Streaming generation failed",
            extra={**fields, "provider": exc.provider, "code": exc.code},
        )
        yield sse_event({"error": exc.message, "retryable": exc.retryable})
        return
    except Exception:
        logger.exception("Streaming generation failed", extra=fields)
        yield sse_event({"error": "Internal server error"})
        return
    yield sse_event({"done": True})


@router.get("/health")
async def ai_health(
    verify: bool = False,
    build_provider: ProviderBuilder = Depends(get_provider_builder),
) -> dict[str, Any]:
    """Report that the AI routes are up; ``verify=true`` also checks the provider."""

    body: dict[str, Any] = {
        "success": True,
        "message": "AI route is accessible",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if not verify:
        return body
    try:
        provider = build_provider()
    except ProviderError as exc:
        body["provider"] = {"name": exc.provider, "available": False, "detail": exc.message}
        return body
    body["provider"] = {
        "name": provider.name,
        "model": provider.model,
        "available": await provider.is_available(),
    }
    return body


@router.post("/generate")
async def generate_post(
    payload: GenerateRequest,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
    settings: ApiSettings = Depends(get_settings),
    build_provider: ProviderBuilder = Depends(get_provider_builder),
):
    brand_voice = payload.brand_voice
    if payload.venture_id is not None:
        venture = await ensure_venture_access(store, payload.venture_id, ctx)
        if brand_voice is None:
            guide = await run_in_threadpool(store.get_brand_guide, venture.id)
            brand_voice = describe_brand_voice(venture, guide)

    provider = build_provider()
    agent = WritingAgent(provider, service_name=settings.service_name)
    options = {"brand_voice": brand_voice, "outline": payload.outline, "max_length": payload.max_length}

    if payload.stream:
        deltas = agent.generate_stream(payload.topic, payload.tone, **options)
        return StreamingResponse(
            _event_stream(deltas, user_id=ctx.user_id),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    with log_context(route="/ai/generate", user_id=ctx.user_id):
        draft = await agent.generate(payload.topic, payload.tone, **options)

    body: dict[str, Any] = {
        "success": True,
        "draft": draft.model_dump(mode="json"),
        "metadata": {
            "model": agent.model,
            "provider": provider.name,
            "tone": payload.tone.value,
            "character_count": draft.character_count,
        },
    }
    if payload.save_as_draft:
        saved = await run_in_threadpool(
            store.create_content,
            ctx.user_id,
            {
                "venture_id": payload.venture_id,
                "topic": payload.topic,
                "original_text": draft.post_text,
                "status": ContentStatus.PENDING_VALIDATION,
                "hashtags": extract_hashtags(draft.post_text),
            },
        )
        body["content_id"] = str(saved.id)
        logger.info("Generated draft saved", extra={"content_id": str(saved.id), "user_id": ctx.user_id})
    return body


@router.put("/generate")
async def revise_post(
    payload: ReviseRequest,
    ctx: RequestContext = Depends(get_request_context),
    settings: ApiSettings = Depends(get_settings),
    build_provider: ProviderBuilder = Depends(get_provider_builder),
) -> dict[str, Any]:
    provider = build_provider()
    agent = WritingAgent(provider, service_name=settings.service_name)
    with log_context(route="/ai/generate", user_id=ctx.user_id):
        draft = await agent.revise(payload.original_draft, payload.feedback)
    return {
        "success": True,
        "draft": draft.model_dump(mode="json"),
        "metadata": {
            "model": agent.model,
            "provider": provider.name,
            "character_count": draft.character_count,
        },
    }


@router.post("/analyze-venture")
async def analyze_venture(
    payload: AnalyzeVentureRequest,
    ctx: RequestContext = Depends(get_request_context),
    settings: ApiSettings = Depends(get_settings),
    build_provider: ProviderBuilder = Depends(get_provider_builder),
) -> dict[str, Any]:
    provider = build_provider()
    agent = SuggestionAgent(provider, service_name=settings.service_name)
    with log_context(route="/ai/analyze-venture", user_id=ctx.user_id):
        insights = await agent.analyze_venture(
            payload.venture_name, website=payload.website, description=payload.description
        )
    return {"success": True, "insights": insights.model_dump(mode="json")}


@router.post("/suggest-topics")
async def suggest_topics(
    payload: SuggestTopicsRequest,
    ctx: RequestContext = Depends(get_request_context),
    settings: ApiSettings = Depends(get_settings),
    build_provider: ProviderBuilder = Depends(get_provider_builder),
) -> dict[str, Any]:
    provider = build_provider()
    agent = SuggestionAgent(provider, service_name=settings.service_name)
    with log_context(route="/ai/suggest-topics", user_id=ctx.user_id):
        topics = await agent.suggest_topics(payload.to_context(), payload.count)
    return {"success": True, "topics": [topic.model_dump(mode="json") for topic in topics]}


@router.post("/suggest-schedule")
async def suggest_schedule(
    payload: VentureContextRequest,
    ctx: RequestContext = Depends(get_request_context),
    settings: ApiSettings = Depends(get_settings),
    build_provider: ProviderBuilder = Depends(get_provider_builder),
) -> dict[str, Any]:
    provider = build_provider()
    agent = SuggestionAgent(provider, service_name=settings.service_name)
    with log_context(route="/ai/suggest-schedule", user_id=ctx.user_id):
        schedule = await agent.suggest_schedule(payload.to_context())
    return {"success": True, "schedule": schedule.model_dump(mode="json")}


@router.post("/next-steps")
async def next_steps(
    payload: NextStepsRequest,
    ctx: RequestContext = Depends(get_request_context),
    settings: ApiSettings = Depends(get_settings),
    build_provider: ProviderBuilder = Depends(get_provider_builder),
) -> dict[str, Any]:
    provider = build_provider()
    agent = SuggestionAgent(provider, service_name=settings.service_name)
    with log_context(route="/ai/next-steps", user_id=ctx.user_id):
        steps = await agent.suggest_next_steps(payload.draft, payload.to_context())
    return {"success": True, "next_steps": steps}
