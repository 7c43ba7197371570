from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_current_admin, get_db_pool
from ..repositories.interaction_repository import InteractionRepository
from ..repositories.project_repository import ProjectRepository
from ..schemas.event import EventFilters
from ..schemas.stats import StatsResponse
from ..services.stats_service import StatsService

router = APIRouter()


async def get_stats_service(db=Depends(get_db_pool)):
    # One read-only snapshot per request: the listing and every summary agree
    async with db.acquire() as conn:
        async with conn.transaction(isolation="repeatable_read", readonly=True):
            yield StatsService(InteractionRepository(conn), ProjectRepository(conn))


@router.get("/api/stats", response_model=StatsResponse)
async def get_stats(
    filters: Annotated[EventFilters, Query()],
    admin: dict = Depends(get_current_admin),
    service: StatsService = Depends(get_stats_service)
):
    """
    Raw events (filtered, paginated) plus the dashboard summary. Admin only.
    """
    data = await service.get_stats(filters)
    return {"message": "Stats retrieved successfully", "data": data}
