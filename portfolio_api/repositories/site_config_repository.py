import json
from typing import Any, Dict, Optional

from asyncpg import Pool

from ..models.site_config import SITE_CONFIG_ID


def _to_dict(row) -> Dict[str, Any]:
    content = row["content"]
    if isinstance(content, str):
        content = json.loads(content)
    return {"content": content, "updated_at": row["updated_at"]}


class SiteConfigRepository:
    """
    The site configuration lives in a single row with a fixed key.
    """

    def __init__(self, db: Pool):
        self.db = db

    async def get(self) -> Optional[Dict[str, Any]]:
        query = "SELECT content, updated_at FROM site_config WHERE id = $1"
        row = await self.db.fetchrow(query, SITE_CONFIG_ID)
        return _to_dict(row) if row else None

    async def seed(self, defaults: Dict[str, Any]) -> Dict[str, Any]:
        """Insert the defaults unless a row already exists, then return the row."""
        query = """
            INSERT INTO site_config (id, content, updated_at)
            VALUES ($1, $2::jsonb, NOW())
            ON CONFLICT (id) DO NOTHING
        """
        await self.db.execute(query, SITE_CONFIG_ID, json.dumps(defaults))
        return await self.get()

    async def merge(self, changes: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overwrite the top-level keys in `changes`, keeping the others.

        When the row does not exist yet it is created from `defaults` first.
        """
        query = """
            INSERT INTO site_config (id, content, updated_at)
            VALUES ($1, $2::jsonb || $3::jsonb, NOW())
            ON CONFLICT (id) DO UPDATE
            SET content = site_config.content || $3::jsonb,
                updated_at = NOW()
            RETURNING content, updated_at
        """
        row = await self.db.fetchrow(query, SITE_CONFIG_ID, json.dumps(defaults), json.dumps(changes))
        return _to_dict(row)
