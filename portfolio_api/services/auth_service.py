
import logging
from datetime import timedelta

from fastapi import HTTPException, status

from ..config import settings
from ..repositories.admin_repository import AdminRepository
from ..schemas.auth import AdminLogin, AdminRole, Token
from ..core.security import verify_password, get_password_hash, create_access_token

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, admin_repo: AdminRepository):
        self.admin_repo = admin_repo

    async def authenticate_admin(self, login_data: AdminLogin) -> Token:
        admin = await self.admin_repo.get_by_email(login_data.email.strip().lower())
        if not admin or not verify_password(login_data.password, admin['hashed_password']):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )

        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = create_access_token(
            data={"sub": admin['email'], "role": admin['role']}, expires_delta=access_token_expires
        )
        return Token(access_token=access_token, token_type="bearer")

    async def ensure_superadmin(self, email: str, password: str) -> None:
        """
        Create the configured superadmin, or promote the account if it exists.

        Idempotent; safe to run on every startup.
        """
        email = email.strip().lower()
        existing = await self.admin_repo.get_by_email(email)

        if existing is None:
            await self.admin_repo.create_admin(email, AdminRole.SUPERADMIN.value, get_password_hash(password))
            logger.info("Superadmin created", extra={"email": email})
        elif existing['role'] != AdminRole.SUPERADMIN.value:
            await self.admin_repo.update_admin(existing['id'], {"role": AdminRole.SUPERADMIN.value})
            logger.info("Existing admin promoted to superadmin", extra={"email": email})
