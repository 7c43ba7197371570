
from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm

from ..config import settings
from ..schemas.auth import AdminDetail, AdminLogin, Token
from ..dependencies import get_current_admin, get_db_pool
from ..repositories.admin_repository import AdminRepository
from ..services.auth_service import AuthService
from ..limiter import limiter

router = APIRouter()


async def get_auth_service(db=Depends(get_db_pool)) -> AuthService:
    return AuthService(AdminRepository(db))


@router.post("/auth/login", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: AuthService = Depends(get_auth_service)
):
    """Exchange admin credentials for a session token (username = email)"""
    login_data = AdminLogin(email=form_data.username, password=form_data.password)
    return await service.authenticate_admin(login_data)


@router.get("/auth/me", response_model=AdminDetail)
async def me(admin: dict = Depends(get_current_admin)):
    """The admin behind the current session"""
    return admin
