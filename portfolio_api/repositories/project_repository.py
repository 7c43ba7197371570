from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from asyncpg import Pool

_PROJECT_COLUMNS = """
    id, name, youtube_url, display_order AS "order", created_at, updated_at
"""


class ProjectRepository:
    def __init__(self, db: Pool):
        self.db = db

    async def list_projects(self) -> List[Dict[str, Any]]:
        query = f"""
            SELECT {_PROJECT_COLUMNS}
            FROM projects
            ORDER BY display_order ASC, created_at DESC
        """
        rows = await self.db.fetch(query)
        return [dict(row) for row in rows]

    async def get_project(self, project_id: UUID) -> Optional[Dict[str, Any]]:
        query = f"SELECT {_PROJECT_COLUMNS} FROM projects WHERE id = $1"
        row = await self.db.fetchrow(query, project_id)
        return dict(row) if row else None

    async def get_names(self, project_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """Map id -> name for the ids that still exist; missing ids are simply absent."""
        ids = list(project_ids)
        if not ids:
            return {}
        query = "SELECT id, name FROM projects WHERE id = ANY($1::uuid[])"
        rows = await self.db.fetch(query, ids)
        return {row["id"]: row["name"] for row in rows}

    async def get_next_order(self) -> int:
        query = "SELECT COALESCE(MAX(display_order) + 1, 0) FROM projects"
        return await self.db.fetchval(query)

    async def create_project(self, name: str, youtube_url: str, order: int) -> Dict[str, Any]:
        query = f"""
            INSERT INTO projects (name, youtube_url, display_order, created_at, updated_at)
            VALUES ($1, $2, $3, NOW(), NOW())
            RETURNING {_PROJECT_COLUMNS}
        """
        row = await self.db.fetchrow(query, name, youtube_url, order)
        return dict(row)

    async def update_project(self, project_id: UUID, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Partial update. `fields` uses API names (name, youtube_url, order).
        """
        columns = {"name": "name", "youtube_url": "youtube_url", "order": "display_order"}
        assignments = ["updated_at = NOW()"]
        params: List[Any] = [project_id]
        for key, value in fields.items():
            params.append(value)
            assignments.append(f"{columns[key]} = ${len(params)}")

        query = f"""
            UPDATE projects
            SET {', '.join(assignments)}
            WHERE id = $1
            RETURNING {_PROJECT_COLUMNS}
        """
        row = await self.db.fetchrow(query, *params)
        return dict(row) if row else None

    async def delete_project(self, project_id: UUID) -> Optional[Dict[str, Any]]:
        query = f"DELETE FROM projects WHERE id = $1 RETURNING {_PROJECT_COLUMNS}"
        row = await self.db.fetchrow(query, project_id)
        return dict(row) if row else None
