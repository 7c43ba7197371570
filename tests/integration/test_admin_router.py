import uuid
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from unittest.mock import AsyncMock


def _admin_row(email="editor@example.com", role="admin"):
    return {"id": uuid.uuid4(), "email": email, "role": role,
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc)}


@pytest.mark.asyncio
async def test_list_admins(client: AsyncClient, as_superadmin, mock_db_pool: AsyncMock):
    mock_db_pool.fetch.return_value = [_admin_row(), _admin_row("owner@example.com", "superadmin")]

    response = await client.get("/api/admins")

    assert response.status_code == 200
    assert [a["role"] for a in response.json()["data"]] == ["admin", "superadmin"]


@pytest.mark.asyncio
async def test_plain_admin_cannot_manage_admins(client: AsyncClient, as_admin):
    response = await client.post("/api/admins", json={"email": "new@example.com", "password": "password123"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_admin_invalid_email(client: AsyncClient, as_superadmin):
    response = await client.post("/api/admins", json={"email": "not-an-email", "password": "password123"})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "email"


@pytest.mark.asyncio
async def test_create_admin_invalid_role(client: AsyncClient, as_superadmin):
    response = await client.post(
        "/api/admins", json={"email": "new@example.com", "password": "password123", "role": "owner"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_admin_duplicate(client: AsyncClient, as_superadmin, mock_db_pool: AsyncMock):
    mock_db_pool.fetchrow.return_value = _admin_row("new@example.com")

    response = await client.post("/api/admins", json={"email": "New@Example.com", "password": "password123"})

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "email", "message": "Admin with this email already exists"}
    ]


@pytest.mark.asyncio
async def test_superadmin_cannot_delete_self(client: AsyncClient, as_superadmin, mock_db_pool: AsyncMock):
    mock_db_pool.fetchrow.return_value = _admin_row(as_superadmin["email"], "superadmin")

    response = await client.delete(f"/api/admins/{uuid.uuid4()}")

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot delete your own admin account"


@pytest.mark.asyncio
async def test_delete_admin_invalid_id(client: AsyncClient, as_superadmin):
    response = await client.delete("/api/admins/123")
    assert response.status_code == 400
