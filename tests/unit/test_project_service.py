import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock

from portfolio_api.exceptions import NotFoundException
from portfolio_api.repositories.project_repository import ProjectRepository
from portfolio_api.schemas.project import ProjectCreate, ProjectUpdate
from portfolio_api.services.project_service import ProjectService


def _project(**overrides):
    now = datetime.now(timezone.utc)
    row = {
        "id": uuid.uuid4(),
        "name": "Night Drive",
        "youtube_url": "https://youtu.be/abc123",
        "order": 0,
        "created_at": now,
        "updated_at": now,
    }
    row.update(overrides)
    return row


@pytest.fixture
def mock_project_repo():
    return AsyncMock(spec=ProjectRepository)


@pytest.mark.asyncio
async def test_create_project_appends_when_order_missing(mock_project_repo):
    mock_project_repo.get_next_order.return_value = 3
    mock_project_repo.create_project.return_value = _project(order=3)
    service = ProjectService(mock_project_repo)

    project = await service.create_project(ProjectCreate(name="  Night Drive ", youtube_url="https://youtu.be/abc123"))

    mock_project_repo.create_project.assert_called_once_with("Night Drive", "https://youtu.be/abc123", 3)
    assert project.order == 3


@pytest.mark.asyncio
async def test_create_project_keeps_explicit_order(mock_project_repo):
    mock_project_repo.create_project.return_value = _project(order=0)
    service = ProjectService(mock_project_repo)

    await service.create_project(ProjectCreate(name="Reel", youtube_url="https://www.youtube.com/watch?v=x", order=0))

    mock_project_repo.get_next_order.assert_not_called()
    assert mock_project_repo.create_project.call_args.args[2] == 0


@pytest.mark.parametrize("url", ["https://vimeo.com/123", "youtube", "ftp://youtube.com/x"])
def test_rejects_non_youtube_urls(url):
    with pytest.raises(ValidationError):
        ProjectCreate(name="Reel", youtube_url=url)


def test_rejects_blank_name():
    with pytest.raises(ValidationError):
        ProjectCreate(name="   ", youtube_url="https://youtu.be/abc")


@pytest.mark.asyncio
async def test_update_sends_only_given_fields(mock_project_repo):
    project_id = uuid.uuid4()
    mock_project_repo.update_project.return_value = _project(id=project_id, order=7)
    service = ProjectService(mock_project_repo)

    await service.update_project(project_id, ProjectUpdate(order=7))

    mock_project_repo.update_project.assert_called_once_with(project_id, {"order": 7})


@pytest.mark.asyncio
async def test_get_missing_project(mock_project_repo):
    mock_project_repo.get_project.return_value = None
    service = ProjectService(mock_project_repo)

    with pytest.raises(NotFoundException):
        await service.get_project(uuid.uuid4())


@pytest.mark.asyncio
async def test_delete_missing_project(mock_project_repo):
    mock_project_repo.delete_project.return_value = None
    service = ProjectService(mock_project_repo)

    with pytest.raises(NotFoundException):
        await service.delete_project(uuid.uuid4())
