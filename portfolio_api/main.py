"""
=============================================================================
PORTFOLIO API - backend for the VCR-station portfolio site
=============================================================================
Features:
  - Public interaction tracking (page visits, cassettes, contact items)
  - Admin analytics dashboard data, recomputed from raw events on each read
  - Project registry, site copy and admin management behind JWT sessions
=============================================================================
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import DEFAULT_SECRET_KEY, settings
from .dependencies import close_resources, get_db_pool, init_resources, state
from .exceptions import (
    FieldValidationError,
    NotFoundException,
    field_validation_exception_handler,
    global_exception_handler,
    http_exception_handler,
    not_found_exception_handler,
    validation_exception_handler,
)
from .limiter import limiter
from .logging_config import setup_logging
from .middleware import RequestTrackingMiddleware
from .repositories.admin_repository import AdminRepository
from .routers import (
    admin_router,
    auth_router,
    event_router,
    project_router,
    site_config_router,
    stats_router,
)
from .services.auth_service import AuthService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is the built-in default; admin sessions can be forged until it is set")

    await init_resources()

    if settings.SUPERADMIN_EMAIL and settings.SUPERADMIN_PASSWORD:
        try:
            await AuthService(AdminRepository(state.pg_pool)).ensure_superadmin(
                settings.SUPERADMIN_EMAIL, settings.SUPERADMIN_PASSWORD
            )
        except Exception:
            # The API still serves public traffic without a bootstrap account
            logger.exception("Superadmin bootstrap failed")
    else:
        logger.warning("SUPERADMIN_EMAIL / SUPERADMIN_PASSWORD not set, skipping superadmin bootstrap")

    logger.info("Portfolio API started")
    yield
    await close_resources()
    logger.info("Portfolio API stopped")


app = FastAPI(
    title="Portfolio API",
    description="Interaction analytics and content backend for the portfolio site",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter

app.add_middleware(RequestTrackingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(FieldValidationError, field_validation_exception_handler)
app.add_exception_handler(NotFoundException, not_found_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(auth_router.router, tags=["auth"])
app.include_router(event_router.router, tags=["stats"])
app.include_router(stats_router.router, tags=["stats"])
app.include_router(project_router.router, tags=["projects"])
app.include_router(admin_router.router, tags=["admins"])
app.include_router(site_config_router.router, tags=["site-config"])


@app.get("/health")
async def health_check(db=Depends(get_db_pool)):
    """Liveness plus a database round trip"""
    database = "ok"
    try:
        await db.fetchval("SELECT 1")
    except Exception as e:
        logger.warning("Health check database probe failed", extra={"error": str(e)})
        database = "unavailable"

    return {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
