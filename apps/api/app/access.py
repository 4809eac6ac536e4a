"""Ownership checks shared by the routers.

Each helper loads the referenced row, answers 404 when it does not exist and
403 when it belongs to someone else.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import HTTPException, status
from fastapi.concurrency import run_in_threadpool

from accelerator_schemas.models.content import ContentDraft
from accelerator_schemas.models.prospect import Prospect
from accelerator_schemas.models.venture import Venture

from .deps import RequestContext
from .store import Store


async def ensure_venture_access(store: Store, venture_id: UUID, ctx: RequestContext) -> Venture:
    venture = await run_in_threadpool(store.get_venture, venture_id)
    if venture is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venture not found")
    if venture.user_id != ctx.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have access to this venture")
    return venture


async def ensure_content_access(store: Store, content_id: UUID, ctx: RequestContext) -> ContentDraft:
    draft = await run_in_threadpool(store.get_content, content_id)
    if draft is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content draft not found")
    if draft.user_id != ctx.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="You do not have access to this content draft"
        )
    return draft


async def ensure_prospect_access(store: Store, prospect_id: UUID, ctx: RequestContext) -> Prospect:
    found = await run_in_threadpool(store.get_prospect, prospect_id)
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prospect not found")
    prospect, owner_id = found
    if owner_id != ctx.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have access to this prospect")
    return prospect
