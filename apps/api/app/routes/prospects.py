"""Prospect tracking and outreach logging."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

import psycopg
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.concurrency import run_in_threadpool

from accelerator_schemas.models.prospect import OutreachTask, Prospect

from ..access import ensure_prospect_access, ensure_venture_access
from ..deps import RequestContext, get_request_context, get_store
from ..models import OutreachCreateRequest, ProspectCreateRequest, ProspectUpdateRequest
from ..store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/prospects", tags=["prospects"])

DUPLICATE_PROSPECT = "A prospect with this LinkedIn URL already exists"


@router.get("", response_model=list[Prospect])
async def list_prospects(
    venture_id: Optional[UUID] = None,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> list[Prospect]:
    return await run_in_threadpool(lambda: store.list_prospects(ctx.user_id, venture_id=venture_id))


@router.post("", response_model=Prospect, status_code=status.HTTP_201_CREATED)
async def create_prospect(
    payload: ProspectCreateRequest,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Prospect:
    await ensure_venture_access(store, payload.venture_id, ctx)
    try:
        prospect = await run_in_threadpool(store.create_prospect, ctx.user_id, payload.model_dump())
    except psycopg.errors.UniqueViolation as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_PROSPECT) from exc
    logger.info("Prospect created", extra={"prospect_id": str(prospect.id), "user_id": ctx.user_id})
    return prospect


@router.get("/{prospect_id}", response_model=Prospect)
async def get_prospect(
    prospect_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Prospect:
    # Filtered by owner in the lookup, so foreign prospects read as missing.
    prospect = await run_in_threadpool(store.get_owned_prospect, prospect_id, ctx.user_id)
    if prospect is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prospect not found")
    return prospect


@router.put("/{prospect_id}", response_model=Prospect)
async def update_prospect(
    prospect_id: UUID,
    payload: ProspectUpdateRequest,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Prospect:
    await ensure_prospect_access(store, prospect_id, ctx)
    try:
        updated = await run_in_threadpool(
            store.update_prospect, prospect_id, payload.model_dump(exclude_unset=True)
        )
    except psycopg.errors.UniqueViolation as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_PROSPECT) from exc
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prospect not found")
    return updated


@router.delete("/{prospect_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prospect(
    prospect_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Response:
    await ensure_prospect_access(store, prospect_id, ctx)
    await run_in_threadpool(store.delete_prospect, prospect_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{prospect_id}/outreach", response_model=list[OutreachTask])
async def list_outreach(
    prospect_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> list[OutreachTask]:
    await ensure_prospect_access(store, prospect_id, ctx)
    return await run_in_threadpool(store.list_outreach, prospect_id)


@router.post("/{prospect_id}/outreach", response_model=OutreachTask, status_code=status.HTTP_201_CREATED)
async def create_outreach(
    prospect_id: UUID,
    payload: OutreachCreateRequest,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> OutreachTask:
    await ensure_prospect_access(store, prospect_id, ctx)
    task = await run_in_threadpool(store.create_outreach, prospect_id, payload.model_dump())
    logger.info(
        "Outreach task logged",
        extra={"prospect_id": str(prospect_id), "user_id": ctx.user_id, "phase": task.phase.value},
    )
    return task
