import uuid
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from unittest.mock import AsyncMock

NOW = datetime(2024, 2, 1, tzinfo=timezone.utc)


def _project_row(project_id=None, **overrides):
    row = {
        "id": project_id or uuid.uuid4(),
        "name": "Night Drive",
        "youtube_url": "https://youtu.be/abc123",
        "order": 0,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


@pytest.mark.asyncio
async def test_list_projects_is_public(client: AsyncClient, mock_db_pool: AsyncMock):
    mock_db_pool.fetch.return_value = [_project_row(), _project_row(name="Reel", order=1)]

    response = await client.get("/api/projects")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [p["name"] for p in data] == ["Night Drive", "Reel"]
    assert data[0]["youtubeUrl"] == "https://youtu.be/abc123"


@pytest.mark.asyncio
async def test_get_project_invalid_id(client: AsyncClient):
    response = await client.get("/api/projects/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid project ID"


@pytest.mark.asyncio
async def test_get_project_not_found(client: AsyncClient, mock_db_pool: AsyncMock):
    mock_db_pool.fetchrow.return_value = None

    response = await client.get(f"/api/projects/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["message"] == "Project not found"


@pytest.mark.asyncio
async def test_create_project_requires_session(client: AsyncClient):
    response = await client.post("/api/projects", json={"name": "Reel", "youtubeUrl": "https://youtu.be/x"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_project(client: AsyncClient, as_admin, mock_db_pool: AsyncMock):
    mock_db_pool.fetchval.return_value = 2
    mock_db_pool.fetchrow.return_value = _project_row(name="Reel", order=2)

    response = await client.post("/api/projects", json={"name": "Reel", "youtubeUrl": "https://youtu.be/x"})

    assert response.status_code == 201
    assert response.json()["data"]["order"] == 2
    insert_args = mock_db_pool.fetchrow.call_args.args
    assert insert_args[1:] == ("Reel", "https://youtu.be/x", 2)


@pytest.mark.asyncio
async def test_create_project_bad_url(client: AsyncClient, as_admin, mock_db_pool: AsyncMock):
    response = await client.post("/api/projects", json={"name": "Reel", "youtubeUrl": "https://vimeo.com/1"})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "youtubeUrl"
    mock_db_pool.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_delete_project_keeps_its_events(client: AsyncClient, as_admin, mock_db_pool: AsyncMock):
    project_id = uuid.uuid4()
    mock_db_pool.fetchrow.return_value = _project_row(project_id)

    response = await client.delete(f"/api/projects/{project_id}")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == str(project_id)
    queries = [c.args[0] for c in mock_db_pool.fetchrow.call_args_list]
    assert all("interaction_stats" not in q for q in queries)


@pytest.mark.asyncio
async def test_update_project(client: AsyncClient, as_admin, mock_db_pool: AsyncMock):
    project_id = uuid.uuid4()
    mock_db_pool.fetchrow.return_value = _project_row(project_id, name="Renamed")

    response = await client.put(f"/api/projects/{project_id}", json={"name": "Renamed"})

    assert response.status_code == 200
    query, *args = mock_db_pool.fetchrow.call_args.args
    assert "updated_at = NOW()" in query
    assert args == [project_id, "Renamed"]
