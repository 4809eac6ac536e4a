"""FastAPI dependencies: caller identity, store, settings, and LLM provider."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool

from accelerator_providers import LLMProvider, ProviderFactory, load_provider_config

from .config import ApiSettings
from .store import Store


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Authenticated caller, threaded explicitly into every handler."""

    user_id: str
    session_id: Optional[UUID] = None


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def get_settings(request: Request) -> ApiSettings:
    return request.app.state.settings


def get_store(request: Request) -> Store:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database is not configured")
    return store


def _extract_token(request: Request, cookie_name: str) -> Optional[str]:
    token = request.cookies.get(cookie_name)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


async def get_request_context(
    request: Request,
    settings: ApiSettings = Depends(get_settings),
    store: Store = Depends(get_store),
) -> RequestContext:
    token = _extract_token(request, settings.session_cookie_name)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    session = await run_in_threadpool(store.resolve_session, hash_token(token))
    if not session:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return RequestContext(user_id=str(session["user_id"]), session_id=session.get("session_id"))


ProviderBuilder = Callable[[], LLMProvider]


def build_configured_provider() -> LLMProvider:
    return ProviderFactory.create(load_provider_config())


def get_provider_builder() -> ProviderBuilder:
    """Hand routes a builder instead of a provider.

    Routes call it once the body has validated, so a bad request answers 400
    even when no provider is configured. Configuration errors surface as 500.
    """

    return build_configured_provider
