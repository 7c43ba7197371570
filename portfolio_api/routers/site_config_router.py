from fastapi import APIRouter, Depends

from ..dependencies import get_current_admin, get_db_pool
from ..repositories.site_config_repository import SiteConfigRepository
from ..schemas.site_config import SiteConfigResponse, SiteConfigUpdate
from ..services.site_config_service import SiteConfigService

router = APIRouter()


async def get_site_config_service(db=Depends(get_db_pool)) -> SiteConfigService:
    return SiteConfigService(SiteConfigRepository(db))


@router.get("/api/site-config", response_model=SiteConfigResponse)
async def get_site_config(service: SiteConfigService = Depends(get_site_config_service)):
    """Site copy for the public pages; seeded with defaults on first read"""
    config = await service.get_config()
    return {"message": "Site config retrieved successfully", "data": config}


@router.put("/api/site-config", response_model=SiteConfigResponse)
async def update_site_config(
    data: SiteConfigUpdate,
    admin: dict = Depends(get_current_admin),
    service: SiteConfigService = Depends(get_site_config_service)
):
    config = await service.update_config(data)
    return {"message": "Site config updated successfully", "data": config}
