import uuid
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock, MagicMock

from portfolio_api.main import app
from portfolio_api.dependencies import get_current_admin, get_db_pool
from portfolio_api.limiter import limiter


@pytest.fixture
def mock_db_pool():
    pool = AsyncMock()
    # pool.acquire() and conn.transaction() are async context managers, not coroutines
    conn = AsyncMock()
    conn.transaction = MagicMock()
    pool.acquire = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    pool.acquire.return_value.__aexit__.return_value = False
    conn.transaction.return_value.__aexit__.return_value = False
    pool.conn = conn
    return pool


@pytest.fixture
def admin_row():
    return {
        "id": uuid.uuid4(),
        "email": "admin@example.com",
        "role": "admin",
        "hashed_password": "unused",
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }


@pytest.fixture
def superadmin_row(admin_row):
    return {**admin_row, "email": "owner@example.com", "role": "superadmin"}


@pytest_asyncio.fixture
async def client(mock_db_pool):
    app.dependency_overrides[get_db_pool] = lambda: mock_db_pool

    # Unhandled errors must come back as 500 responses instead of being re-raised
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    limiter.enabled = False
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True

    app.dependency_overrides = {}


@pytest.fixture
def as_admin(admin_row):
    """Pretend the request carries a valid admin session."""
    app.dependency_overrides[get_current_admin] = lambda: admin_row
    return admin_row


@pytest.fixture
def as_superadmin(superadmin_row):
    app.dependency_overrides[get_current_admin] = lambda: superadmin_row
    return superadmin_row
