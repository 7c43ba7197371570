from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_db_pool, require_superadmin
from ..repositories.admin_repository import AdminRepository
from ..schemas.auth import AdminCreate, AdminListResponse, AdminResponse, AdminUpdate
from ..services.admin_service import AdminService

router = APIRouter(prefix="/api/admins")


async def get_admin_service(db=Depends(get_db_pool)) -> AdminService:
    return AdminService(AdminRepository(db))


def parse_admin_id(id: str) -> UUID:
    try:
        return UUID(id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid admin ID")


@router.get("", response_model=AdminListResponse)
async def list_admins(
    superadmin: dict = Depends(require_superadmin),
    service: AdminService = Depends(get_admin_service)
):
    admins = await service.list_admins()
    return {"message": "Admins retrieved successfully", "data": admins}


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    data: AdminCreate,
    superadmin: dict = Depends(require_superadmin),
    service: AdminService = Depends(get_admin_service)
):
    admin = await service.create_admin(data)
    return {"message": "Admin created successfully", "data": admin}


@router.put("/{id}", response_model=AdminResponse)
async def update_admin(
    data: AdminUpdate,
    admin_id: UUID = Depends(parse_admin_id),
    superadmin: dict = Depends(require_superadmin),
    service: AdminService = Depends(get_admin_service)
):
    admin = await service.update_admin(admin_id, data)
    return {"message": "Admin updated successfully", "data": admin}


@router.delete("/{id}", response_model=AdminResponse)
async def delete_admin(
    admin_id: UUID = Depends(parse_admin_id),
    superadmin: dict = Depends(require_superadmin),
    service: AdminService = Depends(get_admin_service)
):
    admin = await service.delete_admin(admin_id, current_email=superadmin["email"])
    return {"message": "Admin deleted successfully", "data": admin}
