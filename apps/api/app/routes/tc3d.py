"""TC3D reference catalogues and per-user capability scores."""

from __future__ import annotations

import psycopg
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.concurrency import run_in_threadpool

from accelerator_schemas.models.catalog import CapabilityScore, Task, Tier, Tool

from ..deps import RequestContext, get_request_context, get_store
from ..models import CapabilityUpsertRequest
from ..store import Store

router = APIRouter(prefix="/tc3d", tags=["tc3d"])


@router.get("/tools", response_model=list[Tool])
async def list_tools(store: Store = Depends(get_store)) -> list[Tool]:
    return await run_in_threadpool(store.list_tools)


@router.get("/tiers", response_model=list[Tier])
async def list_tiers(store: Store = Depends(get_store)) -> list[Tier]:
    return await run_in_threadpool(store.list_tiers)


@router.get("/tasks", response_model=list[Task])
async def list_tasks(store: Store = Depends(get_store)) -> list[Task]:
    return await run_in_threadpool(store.list_tasks)


@router.get("/capabilities", response_model=list[CapabilityScore])
async def list_capabilities(
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> list[CapabilityScore]:
    return await run_in_threadpool(store.list_capabilities, ctx.user_id)


@router.post("/capabilities", response_model=CapabilityScore)
async def upsert_capability(
    payload: CapabilityUpsertRequest,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> CapabilityScore:
    try:
        capability, inserted = await run_in_threadpool(
            store.upsert_capability, ctx.user_id, payload.model_dump()
        )
    except psycopg.errors.ForeignKeyViolation as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="tool_id or task_id does not reference a known tool or task",
        ) from exc
    response.status_code = status.HTTP_201_CREATED if inserted else status.HTTP_200_OK
    return capability
