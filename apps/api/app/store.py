"""All SQL issued by the API, grouped per aggregate."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional
from uuid import UUID, uuid4

from psycopg import sql

from accelerator_schemas.models.catalog import CapabilityScore, Task, Tier, Tool
from accelerator_schemas.models.content import ContentDraft
from accelerator_schemas.models.prospect import OutreachTask, Prospect
from accelerator_schemas.models.venture import BrandGuide, Venture

from .db import Database

VENTURE_COLUMNS = (
    "venture_name",
    "industry",
    "description",
    "target_audience",
    "unique_value_proposition",
    "key_offerings",
)
BRAND_GUIDE_COLUMNS = (
    "tone",
    "audience",
    "content_pillars",
    "negative_keywords",
    "posting_frequency",
    "auto_approval_threshold",
    "target_platforms",
)
CONTENT_COLUMNS = (
    "venture_id",
    "topic",
    "original_text",
    "edited_text",
    "ai_confidence_score",
    "status",
    "scheduled_publish_at",
    "hashtags",
    "approved_at",
    "published_at",
)
PROSPECT_COLUMNS = (
    "venture_id",
    "linkedin_url",
    "name",
    "title",
    "company",
    "profile_summary",
    "followers_count",
    "avg_post_likes",
    "avg_post_comments",
    "criticality_score",
    "relevance_score",
    "reach_score",
    "proximity_score",
    "reciprocity_score",
    "gap_fill_score",
)
OUTREACH_COLUMNS = (
    "phase",
    "generated_message",
    "edited_message",
    "status",
    "scheduled_at",
)


def _adapt(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _pick(fields: Mapping[str, Any], allowed: tuple[str, ...]) -> dict[str, Any]:
    return {key: _adapt(value) for key, value in fields.items() if key in allowed}


def _insert_query(table: str, values: Mapping[str, Any]) -> sql.Composed:
    columns = list(values)
    return sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values}) RETURNING *").format(
        table=sql.Identifier(table),
        columns=sql.SQL(", ").join(sql.Identifier(column) for column in columns),
        values=sql.SQL(", ").join(sql.Placeholder(column) for column in columns),
    )


def _update_query(table: str, values: Mapping[str, Any], touch: str | None) -> sql.Composed:
    assignments = [
        sql.SQL("{column} = {value}").format(column=sql.Identifier(column), value=sql.Placeholder(column))
        for column in values
    ]
    if touch:
        assignments.append(sql.SQL("{column} = NOW()").format(column=sql.Identifier(touch)))
    return sql.SQL("UPDATE {table} SET {assignments} WHERE id = {id} RETURNING *").format(
        table=sql.Identifier(table),
        assignments=sql.SQL(", ").join(assignments),
        id=sql.Placeholder("id"),
    )


class Store:
    """Persistence operations used by the routers.

    Methods are blocking; routers call them through ``run_in_threadpool``.
    Unique violations surface as ``psycopg.errors.UniqueViolation``.
    """

    def __init__(self, database: Database) -> None:
        self.db = database

    # Sessions -----------------------------------------------------------

    def resolve_session(self, token_hash: str) -> Optional[dict[str, Any]]:
        return self.db.fetch_one(
            """
            UPDATE user_sessions
            SET last_seen_at = NOW()
            WHERE token_hash = %s AND expires_at > NOW()
            RETURNING id AS session_id, user_id
            """,
            (token_hash,),
        )

    def purge_expired_sessions(self) -> int:
        return self.db.execute("DELETE FROM user_sessions WHERE expires_at < NOW()")

    # Ventures -----------------------------------------------------------

    def list_ventures(self, user_id: str) -> list[Venture]:
        rows = self.db.fetch_all(
            "SELECT * FROM venture WHERE user_id = %s ORDER BY created_at DESC",
            (user_id,),
        )
        return [Venture(**row) for row in rows]

    def get_venture(self, venture_id: UUID) -> Optional[Venture]:
        row = self.db.fetch_one("SELECT * FROM venture WHERE id = %s", (venture_id,))
        return Venture(**row) if row else None

    def create_venture(self, user_id: str, fields: Mapping[str, Any]) -> Venture:
        values = {"id": uuid4(), "user_id": user_id, **_pick(fields, VENTURE_COLUMNS)}
        row = self.db.fetch_one(_insert_query("venture", values), values)
        return Venture(**row)

    def update_venture(self, venture_id: UUID, fields: Mapping[str, Any]) -> Optional[Venture]:
        values = _pick(fields, VENTURE_COLUMNS)
        if not values:
            return self.get_venture(venture_id)
        row = self.db.fetch_one(_update_query("venture", values, "updated_at"), {**values, "id": venture_id})
        return Venture(**row) if row else None

    def delete_venture(self, venture_id: UUID) -> bool:
        return self.db.execute("DELETE FROM venture WHERE id = %s", (venture_id,)) > 0

    # Brand guides -------------------------------------------------------

    def get_brand_guide(self, venture_id: UUID) -> Optional[BrandGuide]:
        row = self.db.fetch_one("SELECT * FROM brand_guide WHERE venture_id = %s", (venture_id,))
        return BrandGuide(**row) if row else None

    def upsert_brand_guide(self, venture_id: UUID, fields: Mapping[str, Any]) -> tuple[BrandGuide, bool]:
        values = {"id": uuid4(), "venture_id": venture_id, **_pick(fields, BRAND_GUIDE_COLUMNS)}
        row = self.db.fetch_one(
            """
            INSERT INTO brand_guide (
                id, venture_id, tone, audience, content_pillars, negative_keywords,
                posting_frequency, auto_approval_threshold, target_platforms
            )
            VALUES (
                %(id)s, %(venture_id)s, %(tone)s, %(audience)s, %(content_pillars)s, %(negative_keywords)s,
                %(posting_frequency)s, %(auto_approval_threshold)s, %(target_platforms)s
            )
            ON CONFLICT (venture_id) DO UPDATE
            SET tone = EXCLUDED.tone,
                audience = EXCLUDED.audience,
                content_pillars = EXCLUDED.content_pillars,
                negative_keywords = EXCLUDED.negative_keywords,
                posting_frequency = EXCLUDED.posting_frequency,
                auto_approval_threshold = EXCLUDED.auto_approval_threshold,
                target_platforms = EXCLUDED.target_platforms,
                updated_at = NOW()
            RETURNING *, (xmax = 0) AS inserted
            """,
            values,
        )
        inserted = bool(row.pop("inserted"))
        return BrandGuide(**row), inserted

    # Content drafts -----------------------------------------------------

    def list_content(
        self,
        user_id: str,
        *,
        status: Optional[str] = None,
        venture_id: Optional[UUID] = None,
    ) -> list[ContentDraft]:
        rows = self.db.fetch_all(
            """
            SELECT * FROM content_draft
            WHERE user_id = %(user_id)s
              AND (%(status)s::text IS NULL OR status = %(status)s)
              AND (%(venture_id)s::uuid IS NULL OR venture_id = %(venture_id)s)
            ORDER BY created_at DESC
            """,
            {"user_id": user_id, "status": _adapt(status), "venture_id": venture_id},
        )
        return [ContentDraft(**row) for row in rows]

    def get_content(self, content_id: UUID) -> Optional[ContentDraft]:
        row = self.db.fetch_one("SELECT * FROM content_draft WHERE id = %s", (content_id,))
        return ContentDraft(**row) if row else None

    def create_content(self, user_id: str, fields: Mapping[str, Any]) -> ContentDraft:
        values = {"id": uuid4(), "user_id": user_id, **_pick(fields, CONTENT_COLUMNS)}
        row = self.db.fetch_one(_insert_query("content_draft", values), values)
        return ContentDraft(**row)

    def update_content(self, content_id: UUID, fields: Mapping[str, Any]) -> Optional[ContentDraft]:
        values = _pick(fields, CONTENT_COLUMNS)
        if not values:
            return self.get_content(content_id)
        row = self.db.fetch_one(_update_query("content_draft", values, None), {**values, "id": content_id})
        return ContentDraft(**row) if row else None

    def delete_content(self, content_id: UUID) -> bool:
        return self.db.execute("DELETE FROM content_draft WHERE id = %s", (content_id,)) > 0

    # Prospects ----------------------------------------------------------

    def list_prospects(self, user_id: str, *, venture_id: Optional[UUID] = None) -> list[Prospect]:
        rows = self.db.fetch_all(
            """
            SELECT p.*
            FROM prospect p
            JOIN venture v ON p.venture_id = v.id
            WHERE v.user_id = %(user_id)s
              AND (%(venture_id)s::uuid IS NULL OR p.venture_id = %(venture_id)s)
            ORDER BY p.criticality_score DESC NULLS LAST, p.discovered_at DESC
            """,
            {"user_id": user_id, "venture_id": venture_id},
        )
        return [Prospect(**row) for row in rows]

    def get_prospect(self, prospect_id: UUID) -> Optional[tuple[Prospect, str]]:
        """Return the prospect with the user id owning its venture."""

        row = self.db.fetch_one(
            """
            SELECT p.*, v.user_id AS owner_id
            FROM prospect p
            JOIN venture v ON p.venture_id = v.id
            WHERE p.id = %s
            """,
            (prospect_id,),
        )
        if not row:
            return None
        owner_id = row.pop("owner_id")
        return Prospect(**row), owner_id

    def get_owned_prospect(self, prospect_id: UUID, user_id: str) -> Optional[Prospect]:
        row = self.db.fetch_one(
            """
            SELECT p.*
            FROM prospect p
            JOIN venture v ON p.venture_id = v.id
            WHERE p.id = %s AND v.user_id = %s
            """,
            (prospect_id, user_id),
        )
        return Prospect(**row) if row else None

    def create_prospect(self, user_id: str, fields: Mapping[str, Any]) -> Prospect:
        values = {"id": uuid4(), "user_id": user_id, **_pick(fields, PROSPECT_COLUMNS)}
        row = self.db.fetch_one(_insert_query("prospect", values), values)
        return Prospect(**row)

    def update_prospect(self, prospect_id: UUID, fields: Mapping[str, Any]) -> Optional[Prospect]:
        values = _pick(fields, PROSPECT_COLUMNS)
        if not values:
            result = self.get_prospect(prospect_id)
            return result[0] if result else None
        row = self.db.fetch_one(
            _update_query("prospect", values, "last_updated_at"), {**values, "id": prospect_id}
        )
        return Prospect(**row) if row else None

    def delete_prospect(self, prospect_id: UUID) -> bool:
        return self.db.execute("DELETE FROM prospect WHERE id = %s", (prospect_id,)) > 0

    # Outreach -----------------------------------------------------------

    def list_outreach(self, prospect_id: UUID) -> list[OutreachTask]:
        rows = self.db.fetch_all(
            "SELECT * FROM outreach_task WHERE prospect_id = %s ORDER BY created_at DESC",
            (prospect_id,),
        )
        return [OutreachTask(**row) for row in rows]

    def create_outreach(self, prospect_id: UUID, fields: Mapping[str, Any]) -> OutreachTask:
        values = {"id": uuid4(), "prospect_id": prospect_id, **_pick(fields, OUTREACH_COLUMNS)}
        row = self.db.fetch_one(_insert_query("outreach_task", values), values)
        return OutreachTask(**row)

    # TC3D catalogue -----------------------------------------------------

    def list_tools(self) -> list[Tool]:
        return [Tool(**row) for row in self.db.fetch_all("SELECT * FROM tool ORDER BY tool_name ASC")]

    def list_tiers(self) -> list[Tier]:
        return [Tier(**row) for row in self.db.fetch_all("SELECT * FROM tier ORDER BY order_index ASC")]

    def list_tasks(self) -> list[Task]:
        rows = self.db.fetch_all("SELECT * FROM task ORDER BY category ASC, task_name ASC")
        return [Task(**row) for row in rows]

    def list_capabilities(self, user_id: str) -> list[CapabilityScore]:
        rows = self.db.fetch_all(
            "SELECT * FROM capability_score WHERE user_id = %s ORDER BY updated_at DESC",
            (user_id,),
        )
        return [CapabilityScore(**row) for row in rows]

    def upsert_capability(self, user_id: str, fields: Mapping[str, Any]) -> tuple[CapabilityScore, bool]:
        values = {
            "id": uuid4(),
            "user_id": user_id,
            "tool_id": fields["tool_id"],
            "task_id": fields.get("task_id"),
            "score": fields["score"],
            "source": _adapt(fields["source"]),
        }
        row = self.db.fetch_one(
            """
            INSERT INTO capability_score (id, user_id, tool_id, task_id, score, source)
            VALUES (%(id)s, %(user_id)s, %(tool_id)s, %(task_id)s, %(score)s, %(source)s)
            ON CONFLICT ON CONSTRAINT capability_score_key DO UPDATE
            SET score = EXCLUDED.score,
                source = EXCLUDED.source,
                updated_at = NOW()
            RETURNING *, (xmax = 0) AS inserted
            """,
            values,
        )
        inserted = bool(row.pop("inserted"))
        return CapabilityScore(**row), inserted
