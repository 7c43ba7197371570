from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_current_admin, get_db_pool
from ..repositories.project_repository import ProjectRepository
from ..schemas.project import ProjectCreate, ProjectListResponse, ProjectResponse, ProjectUpdate
from ..services.project_service import ProjectService

router = APIRouter(prefix="/api/projects")


async def get_project_service(db=Depends(get_db_pool)) -> ProjectService:
    return ProjectService(ProjectRepository(db))


def parse_project_id(id: str) -> UUID:
    try:
        return UUID(id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid project ID")


@router.get("", response_model=ProjectListResponse)
async def list_projects(service: ProjectService = Depends(get_project_service)):
    """Projects in display order. Public: the VCR station renders these as cassettes."""
    projects = await service.list_projects()
    return {"message": "Projects retrieved successfully", "data": projects}


@router.get("/{id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID = Depends(parse_project_id),
    service: ProjectService = Depends(get_project_service)
):
    project = await service.get_project(project_id)
    return {"message": "Project retrieved successfully", "data": project}


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    admin: dict = Depends(get_current_admin),
    service: ProjectService = Depends(get_project_service)
):
    project = await service.create_project(data)
    return {"message": "Project created successfully", "data": project}


@router.put("/{id}", response_model=ProjectResponse)
async def update_project(
    data: ProjectUpdate,
    project_id: UUID = Depends(parse_project_id),
    admin: dict = Depends(get_current_admin),
    service: ProjectService = Depends(get_project_service)
):
    project = await service.update_project(project_id, data)
    return {"message": "Project updated successfully", "data": project}


@router.delete("/{id}", response_model=ProjectResponse)
async def delete_project(
    project_id: UUID = Depends(parse_project_id),
    admin: dict = Depends(get_current_admin),
    service: ProjectService = Depends(get_project_service)
):
    """Interaction events that point at the project are kept."""
    project = await service.delete_project(project_id)
    return {"message": "Project deleted successfully", "data": project}
