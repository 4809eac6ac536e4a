"""Venture and brand guide endpoints."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

import psycopg
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.concurrency import run_in_threadpool

from accelerator_schemas.models.venture import BrandGuide, Venture

from ..access import ensure_venture_access
from ..deps import RequestContext, get_request_context, get_store
from ..models import BrandGuideRequest, VentureCreateRequest, VentureUpdateRequest
from ..store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ventures", tags=["ventures"])

DUPLICATE_VENTURE = "A venture with this name already exists"


@router.get("", response_model=list[Venture])
async def list_ventures(
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> list[Venture]:
    return await run_in_threadpool(store.list_ventures, ctx.user_id)


@router.post("", response_model=Venture, status_code=status.HTTP_201_CREATED)
async def create_venture(
    payload: VentureCreateRequest,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Venture:
    try:
        venture = await run_in_threadpool(store.create_venture, ctx.user_id, payload.model_dump())
    except psycopg.errors.UniqueViolation as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_VENTURE) from exc
    logger.info("Venture created", extra={"venture_id": str(venture.id), "user_id": ctx.user_id})
    return venture


@router.get("/{venture_id}", response_model=Venture)
async def get_venture(
    venture_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Venture:
    return await ensure_venture_access(store, venture_id, ctx)


@router.put("/{venture_id}", response_model=Venture)
async def update_venture(
    venture_id: UUID,
    payload: VentureUpdateRequest,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Venture:
    await ensure_venture_access(store, venture_id, ctx)
    try:
        updated = await run_in_threadpool(
            store.update_venture, venture_id, payload.model_dump(exclude_unset=True)
        )
    except psycopg.errors.UniqueViolation as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_VENTURE) from exc
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venture not found")
    return updated


@router.delete("/{venture_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venture(
    venture_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Response:
    await ensure_venture_access(store, venture_id, ctx)
    await run_in_threadpool(store.delete_venture, venture_id)
    logger.info("Venture deleted", extra={"venture_id": str(venture_id), "user_id": ctx.user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{venture_id}/brand-guide", response_model=Optional[BrandGuide])
async def get_brand_guide(
    venture_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> Optional[BrandGuide]:
    await ensure_venture_access(store, venture_id, ctx)
    return await run_in_threadpool(store.get_brand_guide, venture_id)


@router.post("/{venture_id}/brand-guide", response_model=BrandGuide)
async def upsert_brand_guide(
    venture_id: UUID,
    payload: BrandGuideRequest,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    store: Store = Depends(get_store),
) -> BrandGuide:
    await ensure_venture_access(store, venture_id, ctx)
    guide, inserted = await run_in_threadpool(store.upsert_brand_guide, venture_id, payload.model_dump())
    response.status_code = status.HTTP_201_CREATED if inserted else status.HTTP_200_OK
    return guide
