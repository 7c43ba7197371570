import json
import uuid
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from unittest.mock import AsyncMock

NOW = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def stored_rows(mock_db_pool):
    """Make the INSERT echo back what was written, like RETURNING would."""
    rows = []

    async def fetchrow(query, *args):
        assert "INSERT INTO interaction_stats" in query
        event_type, project_id, item_type, metadata = args
        row = {
            "id": uuid.uuid4(),
            "event_type": event_type,
            "timestamp": NOW,
            "project_id": project_id,
            "item_type": item_type,
            # asyncpg hands JSONB back as text
            "metadata": metadata,
        }
        rows.append(row)
        return row

    mock_db_pool.fetchrow.side_effect = fetchrow
    return rows


@pytest.mark.asyncio
async def test_page_visit_with_only_event_type(client: AsyncClient, stored_rows):
    response = await client.post("/api/stats", json={"eventType": "PAGE_VISIT"})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Interaction stat created successfully"
    assert body["data"]["eventType"] == "PAGE_VISIT"
    assert body["data"]["metadata"] == {}
    assert body["data"]["projectId"] is None
    assert len(stored_rows) == 1


@pytest.mark.asyncio
async def test_tape_inserted_round_trip(client: AsyncClient, stored_rows):
    project_id = str(uuid.uuid4())
    metadata = {"visitorId": "visitor_1700000000_abc", "language": "en-US"}

    response = await client.post("/api/stats", json={
        "eventType": "TAPE_INSERTED",
        "projectId": project_id,
        "metadata": metadata,
        "timestamp": "1999-12-31T23:59:59Z",
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["projectId"] == project_id
    assert data["metadata"] == metadata
    # Server clock, not the client's
    assert data["timestamp"].startswith("2024-06-01T09:30:00")
    assert json.loads(stored_rows[0]["metadata"]) == metadata


@pytest.mark.asyncio
async def test_launch_clicked_without_project(client: AsyncClient, mock_db_pool: AsyncMock):
    response = await client.post("/api/stats", json={"eventType": "LAUNCH_CLICKED"})

    assert response.status_code == 400
    assert response.json() == {
        "message": "Validation error",
        "errors": [{"field": "projectId", "message": "Project ID is required for this event type"}],
    }
    mock_db_pool.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_item_inspected_without_item_type(client: AsyncClient, mock_db_pool: AsyncMock):
    response = await client.post("/api/stats", json={"eventType": "ITEM_INSPECTED"})

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "itemType", "message": "Item type is required for ITEM_INSPECTED events"}
    ]
    mock_db_pool.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_project_id_format(client: AsyncClient, mock_db_pool: AsyncMock):
    response = await client.post("/api/stats", json={"eventType": "TAPE_INSERTED", "projectId": "X"})

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "projectId", "message": "Invalid project ID format"}]
    mock_db_pool.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_missing_event_type(client: AsyncClient):
    response = await client.post("/api/stats", json={"metadata": {"visitorId": "v"}})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "eventType"


@pytest.mark.asyncio
async def test_ingestion_needs_no_session(client: AsyncClient, stored_rows):
    response = await client.post("/api/stats", json={"eventType": "ITEM_INSPECTED", "itemType": "Polaroid"})

    assert response.status_code == 201
    assert response.json()["data"]["itemType"] == "Polaroid"


@pytest.mark.asyncio
async def test_store_failure_is_a_500(client: AsyncClient, mock_db_pool: AsyncMock):
    mock_db_pool.fetchrow.side_effect = ConnectionError("db down")

    response = await client.post("/api/stats", json={"eventType": "PAGE_VISIT"})

    assert response.status_code == 500
    body = response.json()
    assert "message" in body
    assert "db down" not in body["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [[], "x", 5])
async def test_non_object_body_is_a_400(client: AsyncClient, mock_db_pool: AsyncMock, body):
    response = await client.post("/api/stats", json=body)

    assert response.status_code == 400
    assert response.json() == {
        "message": "Validation error",
        "errors": [{"field": "eventType", "message": "Event type is required"}],
    }
    mock_db_pool.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_malformed_json_is_a_400(client: AsyncClient, mock_db_pool: AsyncMock):
    response = await client.post(
        "/api/stats", content=b'{"eventType": "PAGE_VISIT"', headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "body", "message": "Request body must be valid JSON"}]
    mock_db_pool.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_nan_metadata_is_a_400(client: AsyncClient, mock_db_pool: AsyncMock):
    # Starlette's JSON parser accepts NaN; JSONB does not
    response = await client.post(
        "/api/stats",
        content=b'{"eventType": "PAGE_VISIT", "metadata": {"screenWidth": NaN}}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "metadata"
    mock_db_pool.fetchrow.assert_not_called()
