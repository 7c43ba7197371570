import logging

import asyncpg
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from .config import settings
from .core.security import decode_access_token
from .models.schema import ddl_statements
from .repositories.admin_repository import AdminRepository
from .schemas.auth import AdminRole

logger = logging.getLogger(__name__)


# Global state for connections
class AppState:
    pg_pool: asyncpg.Pool = None


state = AppState()


async def init_resources():
    """Open the connection pool and make sure every table exists"""
    state.pg_pool = await asyncpg.create_pool(
        settings.DATABASE_URL,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        command_timeout=60
    )

    async with state.pg_pool.acquire() as conn:
        async with conn.transaction():
            for statement in ddl_statements():
                await conn.execute(statement)
    logger.info("Database schema ready")


async def close_resources():
    if state.pg_pool:
        await state.pg_pool.close()


# Dependencies
async def get_db_pool() -> asyncpg.Pool:
    return state.pg_pool


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


async def get_current_admin(token: str = Depends(oauth2_scheme), db=Depends(get_db_pool)) -> dict:
    """The session check: a valid token that still maps to an admin row."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = decode_access_token(token)
    if payload is None or payload.get("sub") is None:
        raise credentials_exception

    admin = await AdminRepository(db).get_by_email(payload["sub"])
    if admin is None:
        raise credentials_exception
    return admin


async def require_superadmin(admin: dict = Depends(get_current_admin)) -> dict:
    if admin["role"] != AdminRole.SUPERADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Superadmin access required",
        )
    return admin
