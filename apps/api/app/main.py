"""HTTP API for the LinkedIn accelerator: ventures, content, prospects, TC3D, AI."""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from accelerator_agents import AgentOutputError
from accelerator_observability import setup_fastapi_metrics, setup_logging
from accelerator_providers import ProviderError, RateLimitError

from .config import ApiSettings, load_api_settings
from .db import Database, initialise_schema
from .routes import ROUTERS
from .store import Store

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def validation_detail(exc: RequestValidationError) -> str:
    """Render the first validation error as a sentence naming the field."""

    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in _LOCATION_PREFIXES]
    field = ".".join(location) or "body"
    if first.get("type") == "missing":
        return f"{field} is required"
    message = str(first.get("msg", "Invalid value"))
    if message.startswith("Value error, "):
        message = message[len("Value error, ") :]
    if location and location[0] in message:
        return message
    return f"{field}: {message}"


def _route_tag(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": validation_detail(exc)})

    @app.exception_handler(ProviderError)
    async def _provider_handler(request: Request, exc: ProviderError) -> JSONResponse:
        status_code = (
            status.HTTP_503_SERVICE_UNAVAILABLE if exc.retryable else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        headers: dict[str, str] = {}
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            headers["Retry-After"] = str(int(max(exc.retry_after, 0)))
        logger.warning(
            "Provider call failed",
            extra={
                "route": _route_tag(request),
                "provider": exc.provider,
                "code": exc.code,
                "retryable": exc.retryable,
            },
        )
        return JSONResponse(
            status_code=status_code,
            content={
                "success": False,
                "detail": exc.message,
                "provider": exc.provider,
                "retryable": exc.retryable,
            },
            headers=headers or None,
        )

    @app.exception_handler(AgentOutputError)
    async def _agent_output_handler(request: Request, exc: AgentOutputError) -> JSONResponse:
        logger.warning(
            "Agent output rejected",
            extra={"route": _route_tag(request), "agent": exc.agent, "operation": exc.operation},
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"success": False, "detail": exc.message},
        )

    @app.exception_handler(Exception)
    async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"route": _route_tag(request), "method": request.method})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def create_app(settings: Optional[ApiSettings] = None, store: Optional[Store] = None) -> FastAPI:
    """Build the application; pass ``store`` to skip opening a database pool."""

    settings = settings or load_api_settings()
    setup_logging(settings.service_name, settings.log_level)

    app = FastAPI(title="LinkedIn Accelerator API", version="0.1.0")
    app.state.settings = settings
    app.state.store = store
    app.state.database = None

    setup_fastapi_metrics(app, service_name=settings.service_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _install_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    @app.on_event("startup")
    def _on_startup() -> None:
        if app.state.store is not None:
            return
        if not settings.pg_conninfo:
            logger.warning("DATABASE_URL is not set; persistence endpoints will answer 503")
            return
        database = Database(
            settings.pg_conninfo, min_size=settings.db_pool_min, max_size=settings.db_pool_max
        )
        database.open()
        if settings.init_schema:
            initialise_schema(database)
        app.state.database = database
        app.state.store = Store(database)
        purged = app.state.store.purge_expired_sessions()
        logger.info("Database pool opened", extra={"purged_sessions": purged})

    @app.on_event("shutdown")
    def _on_shutdown() -> None:
        database = app.state.database
        if database is not None:
            database.close()
            app.state.database = None

    @app.get("/health", tags=["health"])
    def health() -> dict[str, Any]:
        """Simple readiness check."""

        return {"status": "ok", "database": app.state.store is not None}

    return app


app = create_app()
