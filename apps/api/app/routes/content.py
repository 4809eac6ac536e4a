"""Content draft CRUD and approval lifecycle."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.concurrency import run_in_threadpool

from accelerator_schemas.enums import ContentStatus
from accelerator_schemas.models.content import (
    STATUS_TIMESTAMP_COLUMNS,
    ContentDraft,
    ContentTransitionError,
    check_transition,
)

from ..access import ensure_content_access, ensure_venture_access
from ..deps import RequestContext, get_request_context, get_store
from ..models import ContentCreateRequest, ContentUpdateRequest
from ..store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


def _status_fields(current: ContentStatus, target: ContentStatus) -> dict[str, Any]:
    """Validate a status change and return the columns it writes."""

    try:
        check_transition(current, target)
    except ContentTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    fields: dict[str, Any] = {"status": target}
    column = STATUS_TIMESTAMP_COLUMNS.get(target)
    if column and current != target:
        fields[column] = datetime.now(timezone.utc)
    return fields


async def _apply_status(store: Store, draft: ContentDraft, target: ContentStatus, ctx: RequestContext) -> ContentDraft:
    fields = _status_fields(draft.status, target)
    updated = await run_in_threadpool(store.update_content, draft.id, fields)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content draft not found")
    logger.info(
        "Content status changed",
        extra={
            "content_id": str(draft.id),
            "user_id": ctx.user_id,
            "from_status": draft.status.value,
            "to_status": target.value,
        },
    )
    return updated


@router.get("", response_model=list[ContentDraft])
async def list_content(
    status_filter: Optional[ContentStatus] = Query(None, alias="status"),
    venture_id: Optional[UUID] = None,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> list[ContentDraft]:
    return await run_in_threadpool(
        lambda: store.list_content(ctx.user_id, status=status_filter, venture_id=venture_id)
    )


@router.post("", response_model=ContentDraft, status_code=status.HTTP_201_CREATED)
async def create_content(
    payload: ContentCreateRequest,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> ContentDraft:
    if payload.venture_id is not None:
        await ensure_venture_access(store, payload.venture_id, ctx)
    draft = await run_in_threadpool(store.create_content, ctx.user_id, payload.model_dump())
    logger.info("Content draft created", extra={"content_id": str(draft.id), "user_id": ctx.user_id})
    return draft


@router.get("/{content_id}", response_model=ContentDraft)
async def get_content(
    content_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> ContentDraft:
    return await ensure_content_access(store, content_id, ctx)


@router.put("/{content_id}", response_model=ContentDraft)
async def update_content(
    content_id: UUID,
    payload: ContentUpdateRequest,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> ContentDraft:
    draft = await ensure_content_access(store, content_id, ctx)
    fields = payload.model_dump(exclude_unset=True)
    target = fields.pop("status", None)
    if target is not None and target != draft.status:
        fields.update(_status_fields(draft.status, target))
    updated = await run_in_threadpool(store.update_content, content_id, fields)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content draft not found")
    return updated


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content(
    content_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Response:
    await ensure_content_access(store, content_id, ctx)
    await run_in_threadpool(store.delete_content, content_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{content_id}/approve", response_model=ContentDraft)
async def approve_content(
    content_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> ContentDraft:
    draft = await ensure_content_access(store, content_id, ctx)
    return await _apply_status(store, draft, ContentStatus.APPROVED, ctx)


@router.post("/{content_id}/reject", response_model=ContentDraft)
async def reject_content(
    content_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> ContentDraft:
    draft = await ensure_content_access(store, content_id, ctx)
    return await _apply_status(store, draft, ContentStatus.REJECTED, ctx)


@router.post("/{content_id}/publish", response_model=ContentDraft)
async def publish_content(
    content_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> ContentDraft:
    draft = await ensure_content_access(store, content_id, ctx)
    return await _apply_status(store, draft, ContentStatus.PUBLISHED, ctx)
