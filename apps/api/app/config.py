"""Environment-driven settings for the API service."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ALLOWED_ORIGINS = ("http://localhost:3000",)


class ApiSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_name: str = "accelerator-api"
    database_url: str | None = None
    allowed_origins: tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    session_cookie_name: str = "accelerator_session"
    db_pool_min: int = Field(1, ge=1)
    db_pool_max: int = Field(10, ge=1)
    init_schema: bool = False
    log_level: str = "INFO"

    @property
    def pg_conninfo(self) -> str | None:
        # SQLAlchemy-style URLs ("postgresql+psycopg://") are accepted as well.
        if not self.database_url:
            return None
        return self.database_url.replace("+psycopg", "")


def _parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def load_api_settings(environ: Mapping[str, str] | None = None) -> ApiSettings:
    env = os.environ if environ is None else environ
    origins = tuple(
        origin.strip()
        for origin in env.get("ACCELERATOR_ALLOWED_ORIGINS", ",".join(DEFAULT_ALLOWED_ORIGINS)).split(",")
        if origin.strip()
    )
    return ApiSettings(
        database_url=env.get("DATABASE_URL") or None,
        allowed_origins=origins,
        session_cookie_name=env.get("ACCELERATOR_SESSION_COOKIE_NAME", "accelerator_session"),
        db_pool_min=int(env.get("ACCELERATOR_DB_POOL_MIN", "1")),
        db_pool_max=int(env.get("ACCELERATOR_DB_POOL_MAX", "10")),
        init_schema=_parse_bool(env.get("ACCELERATOR_INIT_SCHEMA")),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
