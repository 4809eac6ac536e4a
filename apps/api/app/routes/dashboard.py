"""Aggregated overview for the signed-in user."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from accelerator_schemas.models.content import ContentDraft
from accelerator_schemas.models.prospect import Prospect
from accelerator_schemas.models.venture import Venture

from ..deps import RequestContext, get_request_context, get_store
from ..store import Store

router = APIRouter(tags=["dashboard"])


class DashboardSummary(BaseModel):
    ventures: list[Venture]
    content: list[ContentDraft]
    prospects: list[Prospect]


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> DashboardSummary:
    ventures, content, prospects = await asyncio.gather(
        run_in_threadpool(store.list_ventures, ctx.user_id),
        run_in_threadpool(store.list_content, ctx.user_id),
        run_in_threadpool(store.list_prospects, ctx.user_id),
    )
    return DashboardSummary(ventures=ventures, content=content, prospects=prospects)
