import logging
from typing import List
from uuid import UUID

import asyncpg
from fastapi import HTTPException, status

from ..core.security import get_password_hash
from ..exceptions import FieldValidationError, NotFoundException
from ..repositories.admin_repository import AdminRepository
from ..schemas.auth import AdminCreate, AdminDetail, AdminUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Admin with this email already exists"


class AdminService:
    def __init__(self, admin_repo: AdminRepository):
        self.admin_repo = admin_repo

    async def list_admins(self) -> List[AdminDetail]:
        return [AdminDetail.model_validate(row) for row in await self.admin_repo.list_admins()]

    async def create_admin(self, data: AdminCreate) -> AdminDetail:
        if await self.admin_repo.get_by_email(data.email):
            raise FieldValidationError("email", DUPLICATE_EMAIL)

        try:
            row = await self.admin_repo.create_admin(data.email, data.role.value, get_password_hash(data.password))
        except asyncpg.UniqueViolationError:
            # Lost a race with a concurrent insert
            raise FieldValidationError("email", DUPLICATE_EMAIL)

        logger.info("Admin created", extra={"email": data.email, "role": data.role.value})
        return AdminDetail.model_validate(row)

    async def update_admin(self, admin_id: UUID, data: AdminUpdate) -> AdminDetail:
        fields = {}
        if data.email is not None:
            fields["email"] = data.email
        if data.role is not None:
            fields["role"] = data.role.value
        if data.password is not None:
            fields["hashed_password"] = get_password_hash(data.password)

        try:
            row = await self.admin_repo.update_admin(admin_id, fields)
        except asyncpg.UniqueViolationError:
            raise FieldValidationError("email", DUPLICATE_EMAIL)

        if row is None:
            raise NotFoundException("Admin not found")
        return AdminDetail.model_validate(row)

    async def delete_admin(self, admin_id: UUID, current_email: str) -> AdminDetail:
        target = await self.admin_repo.get_by_id(admin_id)
        if target is None:
            raise NotFoundException("Admin not found")
        if target["email"] == current_email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete your own admin account",
            )

        row = await self.admin_repo.delete_admin(admin_id)
        if row is None:
            raise NotFoundException("Admin not found")

        logger.info("Admin deleted", extra={"email": row["email"]})
        return AdminDetail.model_validate(row)
