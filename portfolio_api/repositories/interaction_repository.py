import json
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from asyncpg import Pool

_EVENT_COLUMNS = "s.id, s.event_type, s.timestamp, s.project_id, s.item_type, s.metadata"


def _decode_metadata(row: Dict[str, Any]) -> Dict[str, Any]:
    metadata = row.get("metadata")
    if isinstance(metadata, str):
        row["metadata"] = json.loads(metadata)
    elif metadata is None:
        row["metadata"] = {}
    return row


class InteractionRepository:
    """
    Raw SQL over the interaction_stats table.

    Only INSERT and SELECT are exposed: the event log is append-only.
    `db` may be the pool or a single connection (for snapshot reads).
    """

    def __init__(self, db: Pool):
        self.db = db

    async def create_event(
        self,
        event_type: str,
        project_id: Optional[UUID],
        item_type: Optional[str],
        metadata: Dict[str, Any],
    ) -> Dict[str, Any]:
        query = """
            INSERT INTO interaction_stats (
                event_type,
                project_id,
                item_type,
                metadata,
                timestamp
            ) VALUES ($1, $2, $3, $4::jsonb, NOW())
            RETURNING id, event_type, timestamp, project_id, item_type, metadata
        """
        row = await self.db.fetchrow(
            query,
            event_type,
            project_id,
            item_type,
            json.dumps(metadata, allow_nan=False)
        )
        return _decode_metadata(dict(row))

    async def list_events(
        self,
        limit: int,
        offset: int,
        event_type: Optional[str] = None,
        project_id: Optional[UUID] = None,
        item_type: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Newest first, with the project name joined in (NULL when the project is gone)."""
        clauses = []
        params: List[Any] = []
        for column, value in (("event_type", event_type), ("project_id", project_id), ("item_type", item_type)):
            if value is not None:
                params.append(value)
                clauses.append(f"s.{column} = ${len(params)}")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.extend([limit, offset])
        query = f"""
            SELECT {_EVENT_COLUMNS}, p.name AS project_name
            FROM interaction_stats s
            LEFT JOIN projects p ON p.id = s.project_id
            {where}
            ORDER BY s.timestamp DESC
            LIMIT ${len(params) - 1} OFFSET ${len(params)}
        """
        rows = await self.db.fetch(query, *params)
        return [_decode_metadata(dict(row)) for row in rows]

    async def count_by_event_type(self) -> List[Dict[str, Any]]:
        query = """
            SELECT event_type AS key, COUNT(*) AS count
            FROM interaction_stats
            GROUP BY event_type
            ORDER BY event_type
        """
        rows = await self.db.fetch(query)
        return [dict(row) for row in rows]

    async def get_project_popularity(self, limit: int) -> List[Dict[str, Any]]:
        query = """
            SELECT
                project_id,
                COUNT(*) FILTER (WHERE event_type = 'TAPE_INSERTED') AS tape_inserted,
                COUNT(*) FILTER (WHERE event_type = 'LAUNCH_CLICKED') AS launch_clicked,
                COUNT(*) AS total
            FROM interaction_stats
            WHERE event_type IN ('TAPE_INSERTED', 'LAUNCH_CLICKED')
              AND project_id IS NOT NULL
            GROUP BY project_id
            ORDER BY total DESC, project_id
            LIMIT $1
        """
        rows = await self.db.fetch(query, limit)
        return [dict(row) for row in rows]

    async def count_by_item_type(self) -> List[Dict[str, Any]]:
        query = """
            SELECT item_type AS key, COUNT(*) AS count
            FROM interaction_stats
            WHERE event_type = 'ITEM_INSPECTED'
              AND item_type IS NOT NULL
            GROUP BY item_type
            ORDER BY count DESC, item_type
        """
        rows = await self.db.fetch(query)
        return [dict(row) for row in rows]

    async def get_visitor_totals(self) -> Dict[str, int]:
        # COUNT(DISTINCT ...) skips NULLs, so visits without a visitorId are not "visitors"
        query = """
            SELECT
                COUNT(*) AS total_visits,
                COUNT(DISTINCT metadata->>'visitorId') AS unique_visitors
            FROM interaction_stats
            WHERE event_type = 'PAGE_VISIT'
        """
        row = await self.db.fetchrow(query)
        return dict(row) if row else {"total_visits": 0, "unique_visitors": 0}

    async def get_daily_visits(self, since: datetime) -> List[Dict[str, Any]]:
        # to_char renders in the session time zone, i.e. the server's calendar
        query = """
            SELECT to_char(timestamp, 'YYYY-MM-DD') AS key, COUNT(*) AS count
            FROM interaction_stats
            WHERE event_type = 'PAGE_VISIT'
              AND timestamp >= $1
            GROUP BY key
            ORDER BY key ASC
        """
        rows = await self.db.fetch(query, since)
        return [dict(row) for row in rows]
