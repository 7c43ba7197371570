from typing import Any, Dict, List, Optional
from uuid import UUID

from asyncpg import Pool


class AdminRepository:
    def __init__(self, db: Pool):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[dict]:
        query = "SELECT * FROM admins WHERE email = $1"
        row = await self.db.fetchrow(query, email)
        return dict(row) if row else None

    async def get_by_id(self, admin_id: UUID) -> Optional[dict]:
        query = "SELECT * FROM admins WHERE id = $1"
        row = await self.db.fetchrow(query, admin_id)
        return dict(row) if row else None

    async def list_admins(self) -> List[dict]:
        query = "SELECT id, email, role, created_at FROM admins ORDER BY created_at DESC"
        rows = await self.db.fetch(query)
        return [dict(row) for row in rows]

    async def create_admin(self, email: str, role: str, hashed_password: str) -> dict:
        query = """
            INSERT INTO admins (email, role, hashed_password, created_at)
            VALUES ($1, $2, $3, NOW())
            RETURNING id, email, role, created_at
        """
        row = await self.db.fetchrow(query, email, role, hashed_password)
        return dict(row)

    async def update_admin(self, admin_id: UUID, fields: Dict[str, Any]) -> Optional[dict]:
        """`fields` may hold email, role and hashed_password."""
        assignments = []
        params: List[Any] = [admin_id]
        for column in ("email", "role", "hashed_password"):
            if column in fields:
                params.append(fields[column])
                assignments.append(f"{column} = ${len(params)}")
        if not assignments:
            return await self.get_by_id(admin_id)

        query = f"""
            UPDATE admins
            SET {', '.join(assignments)}
            WHERE id = $1
            RETURNING id, email, role, created_at
        """
        row = await self.db.fetchrow(query, *params)
        return dict(row) if row else None

    async def delete_admin(self, admin_id: UUID) -> Optional[dict]:
        query = "DELETE FROM admins WHERE id = $1 RETURNING id, email, role, created_at"
        row = await self.db.fetchrow(query, admin_id)
        return dict(row) if row else None
