import logging
from typing import List
from uuid import UUID

from ..exceptions import NotFoundException
from ..repositories.project_repository import ProjectRepository
from ..schemas.project import ProjectCreate, ProjectDetail, ProjectUpdate

logger = logging.getLogger(__name__)


class ProjectService:
    """
    CRUD for the project registry.

    Deleting a project leaves its interaction events alone.
    """

    def __init__(self, project_repo: ProjectRepository):
        self.project_repo = project_repo

    async def list_projects(self) -> List[ProjectDetail]:
        return [ProjectDetail.model_validate(row) for row in await self.project_repo.list_projects()]

    async def get_project(self, project_id: UUID) -> ProjectDetail:
        row = await self.project_repo.get_project(project_id)
        if row is None:
            raise NotFoundException("Project not found")
        return ProjectDetail.model_validate(row)

    async def create_project(self, data: ProjectCreate) -> ProjectDetail:
        order = data.order
        if order is None:
            order = await self.project_repo.get_next_order()

        row = await self.project_repo.create_project(data.name, data.youtube_url, order)
        logger.info("Project created", extra={"project_id": str(row["id"]), "project_name": row["name"]})
        return ProjectDetail.model_validate(row)

    async def update_project(self, project_id: UUID, data: ProjectUpdate) -> ProjectDetail:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        row = await self.project_repo.update_project(project_id, fields)
        if row is None:
            raise NotFoundException("Project not found")
        return ProjectDetail.model_validate(row)

    async def delete_project(self, project_id: UUID) -> ProjectDetail:
        row = await self.project_repo.delete_project(project_id)
        if row is None:
            raise NotFoundException("Project not found")
        logger.info("Project deleted", extra={"project_id": str(project_id)})
        return ProjectDetail.model_validate(row)
